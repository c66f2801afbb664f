"""Personal records derived from the result log."""

import datetime

from swimroster.dao.base import TableDAO
from swimroster.logging import get_logger
from swimroster.models.result import PRRecord, Result

logger = get_logger(__name__)


class _Group:
    """Running best and latest swim for one (swimmer, event) pair."""

    def __init__(self, first: Result):
        self.swimmer = first.swimmer
        self.event = first.event
        self.best = first
        self.latest = first
        self.latest_date: datetime.date | None = first.date
        self.race_count = 1

    def add(self, result: Result) -> None:
        self.race_count += 1
        # Ties keep the incumbent
        if result.final_time < self.best.final_time:
            self.best = result
        if result.date is not None and (self.latest_date is None or result.date > self.latest_date):
            self.latest = result
            self.latest_date = result.date

    def to_record(self) -> PRRecord:
        return PRRecord(
            swimmer=self.swimmer,
            event=self.event,
            best_time=self.best.final_time,
            best_meet=self.best.meet,
            best_date=self.best.date,
            race_count=self.race_count,
            latest_time=self.latest.final_time,
            latest_meet=self.latest.meet,
            latest_date=self.latest.date,
        )


def aggregate(results: list[Result]) -> list[PRRecord]:
    """Reduce the result log to one PR record per swimmer and event.

    Rows missing a swimmer, event, or final time are ignored. The best time
    only changes on a strictly faster swim, so among equal times the first
    row seen is kept. The latest time comes from the most recently dated
    row; undated rows never count as later than a dated one, and a group
    with no dated rows uses its first row.

    Returns:
        Records sorted by swimmer, then event
    """
    groups: dict[tuple[str, str], _Group] = {}
    for result in results:
        if not result.counts_toward_prs:
            continue
        key = (result.swimmer, result.event)
        if key in groups:
            groups[key].add(result)
        else:
            groups[key] = _Group(result)
    return [groups[key].to_record() for key in sorted(groups)]


def current_pr(results: list[Result], swimmer: str, event: str) -> float | None:
    """Fastest final time for a swimmer in an event, or None if never swum."""
    times = [
        r.final_time
        for r in results
        if r.counts_toward_prs and r.swimmer == swimmer and r.event == event
    ]
    return min(times) if times else None


def swimmer_dashboard(records: list[PRRecord], swimmer: str) -> list[PRRecord]:
    """One swimmer's PR records, ordered by event."""
    return sorted((r for r in records if r.swimmer == swimmer), key=lambda r: r.event)


class PRService:
    """PR queries over the stored result log."""

    def __init__(self, result_dao: TableDAO[Result]):
        self.result_dao = result_dao

    def list_results(self, swimmer: str | None = None, meet: str | None = None) -> list[Result]:
        filters = {}
        if swimmer:
            filters["swimmer"] = swimmer
        if meet:
            filters["meet"] = meet
        return self.result_dao.find(**filters)

    def all_prs(self) -> list[PRRecord]:
        records = aggregate(self.result_dao.get_all())
        logger.debug("prs_aggregated", records=len(records))
        return records

    def dashboard(self, swimmer: str) -> list[PRRecord]:
        return aggregate(self.result_dao.find(swimmer=swimmer))

    def current_pr(self, swimmer: str, event: str) -> float | None:
        return current_pr(self.result_dao.find(swimmer=swimmer, event=event), swimmer, event)
