"""
Rule-based validation of submitted resource data.

A rule table maps each accepted field to the ordered rules it must satisfy::

    {
        "email": [Required(), EmailFormat(), MaxLength(255), Unique(Customer.email)],
    }

``validate`` runs every rule of every field and collects all the messages
before failing.
"""
import logging
import re
from collections.abc import Mapping
from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import MAX_ID
from app.exceptions import StoreUnavailable, ValidationError

logger = logging.getLogger(__name__)

LOCAL_PART_MAX_LENGTH = 64

RuleTable = dict[str, list["Rule"]]


def attribute_name(field: str) -> str:
    """``first_name`` -> ``first name``"""
    return field.replace("_", " ")


def normalize(value: Any) -> Any:
    """Trim strings and treat blank values as missing."""
    if isinstance(value, str):
        value = value.strip()
    if value in ("", [], {}):
        return None
    return value


class Rule:
    """Base class for a single field constraint."""

    message = "The :attribute is invalid."
    # Implicit rules also run when the field is missing.
    implicit = False

    async def passes(self, value: Any, session: AsyncSession) -> bool:
        raise NotImplementedError

    def format_message(self, field: str) -> str:
        return self.message.replace(":attribute", attribute_name(field))

    def cast(self, value: Any) -> Any:
        """Convert an accepted value to the type that gets stored."""
        return value


class Required(Rule):
    message = "The :attribute field is required."
    implicit = True

    async def passes(self, value, session):
        return value is not None


class MaxLength(Rule):
    message = "The :attribute must not be greater than :max characters."

    def __init__(self, max_length: int):
        self.max_length = max_length

    async def passes(self, value, session):
        return len(str(value)) <= self.max_length

    def format_message(self, field):
        return super().format_message(field).replace(":max", str(self.max_length))

    def cast(self, value):
        return str(value)


class EmailFormat(Rule):
    message = "The :attribute must be a valid email address."

    async def passes(self, value, session):
        if not isinstance(value, str):
            return False
        # MaxLength owns length, so an over-long local part is checked for
        # syntax at the RFC 5321 limit instead.
        local, _, domain = value.rpartition("@")
        if len(local) > LOCAL_PART_MAX_LENGTH:
            value = f"{local[:LOCAL_PART_MAX_LENGTH].rstrip('.')}@{domain}"
        try:
            validate_email(value, check_deliverability=False, globally_deliverable=False)
        except EmailNotValidError:
            return False
        return True


class Pattern(Rule):
    """The whole value must match ``pattern``."""

    message = "The :attribute format is invalid."

    def __init__(self, pattern: str):
        self.pattern = re.compile(pattern)

    async def passes(self, value, session):
        if not isinstance(value, (str, int)) or isinstance(value, bool):
            return False
        return self.pattern.fullmatch(str(value)) is not None


class Unique(Rule):
    """
    No row may already hold the value in ``column``.

    ``ignore_id`` excludes one row by primary key, so a record can be
    saved again with its own current value.
    """

    message = "The :attribute has already been taken."

    def __init__(self, column, ignore_id: Optional[int] = None):
        self.column = column
        self.ignore_id = ignore_id

    async def passes(self, value, session):
        model = self.column.class_
        query = select(model.id).where(self.column == value)
        if self.ignore_id is not None:
            query = query.where(model.id != self.ignore_id)
        result = await session.execute(query.limit(1))
        return result.first() is None


class Exists(Rule):
    """The value must match ``column`` on some existing row."""

    message = "The selected :attribute is invalid."

    def __init__(self, column):
        self.column = column

    def cast(self, value):
        python_type = self.column.expression.type.python_type
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise ValueError(f"{value!r} is not a key")
        return python_type(value)

    async def passes(self, value, session):
        try:
            value = self.cast(value)
        except (TypeError, ValueError):
            return False
        if isinstance(value, int) and not -MAX_ID - 1 <= value <= MAX_ID:
            return False
        result = await session.execute(
            select(self.column).where(self.column == value).limit(1)
        )
        return result.first() is not None


async def validate(
    session: AsyncSession, data: Any, rules: RuleTable
) -> dict[str, Any]:
    """
    Check ``data`` against ``rules``.

    Returns the accepted fields, normalized and cast, and nothing else:
    keys without rules are dropped. Raises ``ValidationError`` with every
    field's messages, in rule order, if anything fails.
    """
    if not isinstance(data, Mapping):
        data = {}

    errors: dict[str, list[str]] = {}
    accepted: dict[str, Any] = {}
    for field, field_rules in rules.items():
        value = normalize(data.get(field))
        messages = []
        for rule in field_rules:
            if value is None and not rule.implicit:
                continue
            if not await rule.passes(value, session):
                messages.append(rule.format_message(field))

        if messages:
            errors[field] = messages
            continue
        if value is not None:
            for rule in field_rules:
                value = rule.cast(value)
        accepted[field] = value

    if errors:
        raise ValidationError(errors)
    return accepted


async def commit_or_revalidate(
    session: AsyncSession, data: Any, rules: RuleTable
) -> None:
    """
    Commit the pending write.

    The rule checks run before the write and can lose a race with a
    concurrent request; the store's constraints then reject the commit.
    In that case the input is validated again so the loser gets the same
    field-scoped error the pre-check would have given.
    """
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        logger.warning("Integrity error on commit, revalidating input")
        await validate(session, data, rules)
        raise
    except (OperationalError, InterfaceError) as exc:
        await session.rollback()
        raise StoreUnavailable(str(exc)) from exc
