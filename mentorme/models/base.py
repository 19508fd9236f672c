#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MentorMe Models v3 - Shared helpers
Validation, identifiers and enum (de)serialization used by every record

Version: 3.0.0
Date: 2026-10-18
"""

import uuid
import dataclasses
import logging
from contextlib import contextmanager
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from mentorme.utils.validators import is_valid_scale

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)
R = TypeVar("R", bound="Record")

# ===== VALIDATION HELPERS =====


class ValidationError(Exception):
    """Invalid record data"""
    pass


def validate_text(text: str, min_length: int = 1, max_length: int = 1000, field_name: str = "text") -> str:
    """Validate and strip a text field"""
    if not isinstance(text, str):
        raise ValidationError(f"{field_name} must be a string")

    text = text.strip()
    if len(text) < min_length:
        raise ValidationError(f"{field_name} must be at least {min_length} characters")

    if len(text) > max_length:
        raise ValidationError(f"{field_name} must be at most {max_length} characters")

    return text


def validate_scale(value: Optional[int], field_name: str, low: int = 1, high: int = 5) -> None:
    """Validate an optional 1-5 style rating"""
    if value is None:
        return
    if not is_valid_scale(value, low, high):
        raise ValidationError(f"{field_name} must be between {low} and {high}")


@contextmanager
def decoding(record_name: str):
    """Turn malformed JSON input into ValidationError"""
    try:
        yield
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.error(f"Failed to deserialize {record_name}: {e}")
        raise ValidationError(f"Could not load {record_name}: {e}") from e


def new_id() -> str:
    return str(uuid.uuid4())


# ===== ENUM SERIALIZATION =====

def enum_to_legacy(member: Enum) -> str:
    """'GoalStatus.active' - the format older exports were written in"""
    return f"{type(member).__name__}.{member.value}"


def parse_enum(enum_class: Type[E], raw: Any, default: E) -> E:
    """Decode an enum from either 'active' or 'GoalStatus.active'

    Unknown values fall back to default instead of failing the whole record.
    """
    if raw is None:
        return default
    if isinstance(raw, enum_class):
        return raw

    text = str(raw)
    prefix = f"{enum_class.__name__}."
    if text.startswith(prefix):
        text = text[len(prefix):]

    try:
        return enum_class(text)
    except ValueError:
        logger.warning(f"Unknown {enum_class.__name__} value {raw!r}, using {default.value}")
        return default


def parse_optional_enum(enum_class: Type[E], raw: Any, fallback: E) -> Optional[E]:
    if raw is None:
        return None
    return parse_enum(enum_class, raw, fallback)


def optional_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


# ===== BASE RECORD =====

class Record:
    """Mixin for frozen dataclass records"""

    def copy_with(self: R, **changes) -> R:
        """New record with the given fields replaced"""
        return dataclasses.replace(self, **changes)
