from .migrations import (
    CURRENT_SCHEMA_VERSION,
    LegacyToV1Migration,
    Migration,
    MigrationError,
    MigrationService,
    V1ToV2Migration,
    V2ToV3Migration,
    is_legacy_format,
)

__all__ = [
    'CURRENT_SCHEMA_VERSION',
    'LegacyToV1Migration',
    'Migration',
    'MigrationError',
    'MigrationService',
    'V1ToV2Migration',
    'V2ToV3Migration',
    'is_legacy_format',
]
