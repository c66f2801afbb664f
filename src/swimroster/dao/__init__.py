"""Data Access Objects for swimroster tables."""

from swimroster.dao.base import BaseDAO, SupabaseClient, TableDAO
from swimroster.dao.event_dao import EventDAO
from swimroster.dao.lineup_dao import LineupDAO
from swimroster.dao.meet_dao import MeetDAO, MeetEventPresetDAO
from swimroster.dao.memory import MemoryDAO
from swimroster.dao.result_dao import ResultDAO
from swimroster.dao.swimmer_dao import SwimmerDAO

__all__ = [
    # Base
    "BaseDAO",
    "MemoryDAO",
    "SupabaseClient",
    "TableDAO",
    # DAOs
    "EventDAO",
    "LineupDAO",
    "MeetDAO",
    "MeetEventPresetDAO",
    "ResultDAO",
    "SwimmerDAO",
]
