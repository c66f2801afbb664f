"""Single-record entry: one result, meet, event, or swimmer at a time.

Every operation validates all of its input before writing anything. Any
failure raises `EntryValidationError` and leaves the tables untouched.
"""

import datetime

from pydantic import ValidationError

from swimroster.dao.base import TableDAO
from swimroster.errors import EntryValidationError
from swimroster.logging import get_logger
from swimroster.models.event import EventDef, EventType
from swimroster.models.meet import Course, Meet
from swimroster.models.result import Result, parse_time_serial
from swimroster.models.swimmer import Gender, Level, Swimmer
from swimroster.services.preset_resolver import PresetResolver

logger = get_logger(__name__)

PR_BASELINE_MEET = "PR Baseline"
FORM_NOTES = "Added via form"


def _validation_error(exc: ValidationError) -> EntryValidationError:
    """First pydantic error as an entry error naming the offending field."""
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or "entry"
    return EntryValidationError(field, f"{field}: {first['msg']}")


def _require(field: str, value: str | None) -> str:
    value = (value or "").strip()
    if not value:
        raise EntryValidationError(field, f"{field} is required")
    return value


def _parse_time(field: str, text: str) -> float:
    try:
        return parse_time_serial(text)
    except ValueError as e:
        raise EntryValidationError(field, str(e)) from e


class EntryService:
    """Adds individual records the way the entry forms do."""

    def __init__(
        self,
        swimmer_dao: TableDAO[Swimmer],
        event_dao: TableDAO[EventDef],
        meet_dao: TableDAO[Meet],
        result_dao: TableDAO[Result],
        presets: PresetResolver,
    ):
        self.swimmer_dao = swimmer_dao
        self.event_dao = event_dao
        self.meet_dao = meet_dao
        self.result_dao = result_dao
        self.presets = presets

    def add_result(
        self,
        meet: str,
        event: str,
        swimmer: str,
        final_time: str,
        seed_time: str | None = None,
        place: int | None = None,
        notes: str = "",
        date: datetime.date | None = None,
    ) -> Result:
        """Append one race result to the log.

        Args:
            meet: Meet name (free text is allowed)
            event: Event name
            swimmer: Swimmer name
            final_time: Final time as "m:ss.xx" or "ss.xx"
            seed_time: Optional seed time in the same format
            place: Optional finishing place
            notes: Free-text notes
            date: Swim date, today if not given

        Returns:
            The stored result

        Raises:
            EntryValidationError: If a required field is blank or a time
                does not parse
        """
        meet = _require("meet", meet)
        event = _require("event", event)
        swimmer = _require("swimmer", swimmer)
        final_serial = _parse_time("final_time", _require("final_time", final_time))
        seed_serial = None
        if seed_time and seed_time.strip():
            seed_serial = _parse_time("seed_time", seed_time)

        try:
            result = Result(
                meet=meet,
                event=event,
                swimmer=swimmer,
                seed_time=seed_serial,
                final_time=final_serial,
                place=place,
                notes=notes,
                date=date or datetime.date.today(),
            )
        except ValidationError as e:
            raise _validation_error(e) from e

        stored = self.result_dao.insert(result)
        logger.info("result_added", meet=meet, event_name=event, swimmer=swimmer)
        return stored

    def add_meet(
        self,
        name: str,
        date: datetime.date | None = None,
        location: str = "",
        course: Course | str | None = None,
        notes: str = "",
        has_jv: bool = True,
    ) -> Meet:
        """Add a meet and give it a preset row for every event."""
        name = _require("name", name)
        if self.meet_dao.get(name) is not None:
            raise EntryValidationError("name", f'Meet "{name}" already exists')
        try:
            meet = Meet(
                name=name, date=date, location=location, course=course, notes=notes, has_jv=has_jv
            )
        except ValidationError as e:
            raise _validation_error(e) from e

        stored = self.meet_dao.insert(meet)
        logger.info("meet_added", meet=stored.name, has_jv=stored.has_jv)
        self.presets.ensure_preset_catalog()
        return stored

    def add_event(
        self,
        name: str,
        type: EventType | str = EventType.INDIVIDUAL,
        distance: int | None = None,
        stroke: str = "",
        default_active: bool = True,
        add_jv: bool = False,
    ) -> list[EventDef]:
        """Add an event, and optionally its JV variant, to the catalog.

        Returns:
            The events inserted: the event itself, then its JV variant if
            one was requested and did not already exist
        """
        name = _require("name", name)
        if self.event_dao.get(name) is not None:
            raise EntryValidationError("name", f'Event "{name}" already exists')
        try:
            event = EventDef(
                name=name, type=type, distance=distance, stroke=stroke, default_active=default_active
            )
        except ValidationError as e:
            raise _validation_error(e) from e

        to_add = [event]
        if add_jv and not event.is_jv:
            variant = event.as_jv_variant()
            if self.event_dao.get(variant.name) is None:
                to_add.append(variant)

        created = self.event_dao.insert_many(to_add)
        logger.info("event_added", events=[e.name for e in created])
        self.presets.ensure_preset_catalog()
        return created

    def add_swimmer_with_prs(
        self,
        name: str,
        grad_year: int | None = None,
        gender: Gender | str | None = None,
        level: Level | str | None = None,
        date: datetime.date | None = None,
        prs: dict[str, str] | None = None,
    ) -> tuple[bool, int]:
        """Create or update a swimmer and log their baseline PR times.

        Only non-blank fields overwrite an existing swimmer. Each PR time
        that parses is logged as a result at the "PR Baseline" meet;
        blank or unparsable times are skipped.

        Returns:
            Tuple of (created, number of PR results added)
        """
        name = _require("name", name)
        updates = {
            field: value
            for field, value in (("grad_year", grad_year), ("gender", gender), ("level", level))
            if value is not None and str(value).strip()
        }

        existing = self.swimmer_dao.get(name)
        try:
            if existing is None:
                swimmer = Swimmer(name=name, **updates)
            else:
                swimmer = Swimmer.model_validate({**existing.model_dump(), **updates})
        except ValidationError as e:
            raise _validation_error(e) from e

        if existing is None:
            self.swimmer_dao.insert(swimmer)
        elif updates:
            self.swimmer_dao.update(swimmer)

        swim_date = date or datetime.date.today()
        results = []
        for event, text in (prs or {}).items():
            if not event or not text or not text.strip():
                continue
            try:
                serial = parse_time_serial(text)
            except ValueError:
                logger.warning("pr_time_skipped", swimmer=name, event_name=event, time=text)
                continue
            results.append(
                Result(
                    meet=PR_BASELINE_MEET,
                    event=event,
                    swimmer=name,
                    final_time=serial,
                    notes=FORM_NOTES,
                    date=swim_date,
                )
            )
        self.result_dao.insert_many(results)

        logger.info("swimmer_saved", swimmer=name, created=existing is None, prs=len(results))
        return existing is None, len(results)
