# mentorme/database/migrations.py

"""
Schema migrations for exported backup payloads

Schema history:
    0 (legacy) - {"version", "exportedAt", "data": {...}} with nested collections
    1 - flat payload, each collection stored as a JSON-encoded string
    2 - structured journal entries always carry rendered content
    3 - todos collection
"""

import copy
import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as EnvelopeError

from mentorme.utils import datetime_utils
from mentorme.models.backup import ExportEnvelope

logger = logging.getLogger(__name__)

CURRENT_SCHEMA_VERSION = 3
LEGACY_VERSION = 0

# legacy "data" key -> flat collection key, with the value used when missing
_LEGACY_COLLECTIONS = {
    "goals": ("goals", []),
    "journalEntries": ("journal_entries", []),
    "habits": ("habits", []),
    "checkin": ("checkins", None),
    "pulseEntries": ("pulse_entries", []),
    "pulseTypes": ("pulse_types", []),
    "conversations": ("conversations", []),
    "settings": ("settings", {}),
}


class MigrationError(Exception):
    """A payload could not be brought to the current schema"""
    pass


def is_legacy_format(data: Dict[str, Any]) -> bool:
    """Pre-versioned exports have 'version' and 'data' but no schemaVersion"""
    return "schemaVersion" not in data and "version" in data and "data" in data


def _decode_collection(data: Dict[str, Any], key: str) -> Optional[Any]:
    raw = data.get(key)
    if raw is None:
        return None
    if isinstance(raw, str):
        return json.loads(raw)
    return raw


class Migration:
    """One schema step, from_version -> to_version"""
    from_version: int = 0
    to_version: int = 0
    description: str = ""

    def can_migrate(self, data: Dict[str, Any]) -> bool:
        return data.get("schemaVersion", 1) == self.from_version

    def migrate(self, data: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError


class LegacyToV1Migration(Migration):
    from_version = LEGACY_VERSION
    to_version = 1
    description = "Flatten nested legacy export into JSON-encoded collections"

    def can_migrate(self, data: Dict[str, Any]) -> bool:
        return is_legacy_format(data)

    def migrate(self, data: Dict[str, Any]) -> Dict[str, Any]:
        legacy = data.get("data") or {}
        build_info = data.get("buildInfo") or {}

        result: Dict[str, Any] = {
            "schemaVersion": self.to_version,
            "exportDate": data.get("exportedAt") or datetime_utils.to_iso(datetime_utils.now()),
            "appVersion": data.get("version"),
            "buildNumber": build_info.get("gitCommitShort"),
        }
        if build_info:
            result["buildInfo"] = build_info

        for legacy_key, (key, empty) in _LEGACY_COLLECTIONS.items():
            value = legacy.get(legacy_key, empty)
            if key == "goals":
                value = [self._strip_goal(goal) for goal in value or []]
            result[key] = json.dumps(value)

        # statistics and the nested data block are not carried over
        return result

    @staticmethod
    def _strip_goal(goal: Dict[str, Any]) -> Dict[str, Any]:
        # isActive is derived from status on goals; habits still carry it
        return {k: v for k, v in goal.items() if k != "isActive"}


class V1ToV2Migration(Migration):
    from_version = 1
    to_version = 2
    description = "Render content for structured journal entries"

    def migrate(self, data: Dict[str, Any]) -> Dict[str, Any]:
        entries = _decode_collection(data, "journal_entries") or []
        rendered = 0
        for entry in entries:
            if entry.get("type") != "structuredJournal" or entry.get("content"):
                continue
            content = self.render_structured_data(entry.get("structuredData") or {})
            if content:
                entry["content"] = content
                rendered += 1

        if rendered:
            logger.info(f"Rendered content for {rendered} structured journal entries")
        data["journal_entries"] = json.dumps(entries)
        data["schemaVersion"] = self.to_version
        return data

    @staticmethod
    def render_structured_data(structured: Dict[str, Any]) -> str:
        """'Key: value' lines, skipping empty answers"""
        return "\n".join(f"{key}: {value}" for key, value in structured.items() if value is not None)


class V2ToV3Migration(Migration):
    from_version = 2
    to_version = 3
    description = "Add todos collection"

    def migrate(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if data.get("todos") is None:
            data["todos"] = json.dumps([])
        data["schemaVersion"] = self.to_version
        return data


class MigrationService:
    """Brings exported payloads up to CURRENT_SCHEMA_VERSION"""

    def __init__(self, migrations: Optional[List[Migration]] = None):
        self.migrations = migrations or [V1ToV2Migration(), V2ToV3Migration()]
        self.legacy_migration = LegacyToV1Migration()

    def get_current_version(self) -> int:
        return CURRENT_SCHEMA_VERSION

    def is_legacy_format(self, data: Dict[str, Any]) -> bool:
        return is_legacy_format(data)

    def needs_migration(self, data: Dict[str, Any]) -> bool:
        return is_legacy_format(data) or data.get("schemaVersion", 1) < CURRENT_SCHEMA_VERSION

    def migrate(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Run every pending step and validate the result. The input is not modified."""
        result = copy.deepcopy(data)
        version = result.get("schemaVersion", 1)

        if version > CURRENT_SCHEMA_VERSION:
            raise MigrationError(
                f"Backup schema v{version} is newer than supported v{CURRENT_SCHEMA_VERSION}"
            )

        for migration in self.migrations:
            if not migration.can_migrate(result):
                continue
            logger.info(
                f"Migrating v{migration.from_version} -> v{migration.to_version}: {migration.description}"
            )
            try:
                result = migration.migrate(result)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.error(f"Migration to v{migration.to_version} failed: {e}")
                raise MigrationError(f"Migration to v{migration.to_version} failed: {e}") from e

        self.validate(result)
        return result

    def migrate_legacy(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Convert a pre-versioned export, then run the regular steps"""
        if not is_legacy_format(data):
            return self.migrate(data)

        logger.info(f"Migrating legacy backup (app version {data.get('version')}) to v1")
        try:
            v1 = self.legacy_migration.migrate(copy.deepcopy(data))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Legacy migration failed: {e}")
            raise MigrationError(f"Legacy migration failed: {e}") from e
        return self.migrate(v1)

    @staticmethod
    def validate(data: Dict[str, Any]) -> ExportEnvelope:
        try:
            return ExportEnvelope.model_validate(data)
        except EnvelopeError as e:
            logger.error(f"Migrated payload failed validation: {e}")
            raise MigrationError(f"Invalid backup payload: {e}") from e
