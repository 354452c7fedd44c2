"""
Timetable validation for the Sports Day competition engine.
Checks a list of time slots against the hard constraints of a sports day.
"""

from collections import defaultdict
from itertools import combinations
from typing import Dict, List, Optional

from sportsday.core.logging_config import get_logger
from sportsday.models import (
    Match, ScheduleSettings, SchedulingConstraint, ScheduleValidationResult,
    SlotType, Team, TimeSlot
)
from sportsday.services.conflicts import build_class_map, match_classes
from sportsday.services.time_utils import (
    find_overlapping_window, intervals_overlap, time_to_minutes
)

logger = get_logger(__name__)

HARD_PENALTY = 1000.0


class ScheduleValidator:
    """
    Validates a timetable against all hard constraints.
    Used on manually edited timetables before they are saved.
    """

    def validate_schedule(
        self,
        slots: List[TimeSlot],
        matches: List[Match],
        settings: ScheduleSettings,
        teams: Optional[List[Team]] = None
    ) -> ScheduleValidationResult:
        """
        Validate a complete timetable.

        Args:
            slots: The timetable to validate
            matches: Matches of the sport
            settings: Settings the timetable was built with
            teams: Teams of the sport, for class conflicts

        Returns:
            ScheduleValidationResult with all violations found
        """
        result = ScheduleValidationResult(is_valid=True)
        match_slots = [slot for slot in slots if slot.type == SlotType.MATCH]
        matches_by_id = {match.id: match for match in matches}
        class_map = build_class_map(teams or [], settings.team_classes)

        self._check_match_references(match_slots, matches_by_id, result)
        self._check_unscheduled_matches(match_slots, matches, result)
        self._check_day_window(match_slots, settings, result)
        self._check_break_overlaps(match_slots, settings, result)
        self._check_simultaneous_matches(match_slots, matches_by_id, class_map, result)

        logger.info(
            f"Validated {len(match_slots)} match slots: valid={result.is_valid}, "
            f"hard violations={len(result.hard_constraint_violations)}"
        )
        for violation in result.hard_constraint_violations[:10]:
            logger.debug(f"{violation.constraint_type}: {violation.description}")
        return result

    def _check_match_references(self, match_slots: List[TimeSlot], matches_by_id: Dict[str, Match],
                                result: ScheduleValidationResult):
        """Every match slot must reference a known match, and only once."""
        seen = defaultdict(int)
        for slot in match_slots:
            if not slot.match_id or slot.match_id not in matches_by_id:
                result.add_violation(SchedulingConstraint(
                    constraint_type="unknown_match",
                    severity="hard",
                    description=f"Slot {slot} references unknown match '{slot.match_id}'",
                    affected_matches=[slot.match_id] if slot.match_id else [],
                    penalty_score=HARD_PENALTY
                ))
                continue
            seen[slot.match_id] += 1

        for match_id, count in seen.items():
            if count > 1:
                result.add_violation(SchedulingConstraint(
                    constraint_type="duplicate_match",
                    severity="hard",
                    description=f"Match {match_id} is scheduled {count} times",
                    affected_matches=[match_id],
                    penalty_score=HARD_PENALTY
                ))

    def _check_unscheduled_matches(self, match_slots: List[TimeSlot], matches: List[Match],
                                   result: ScheduleValidationResult):
        scheduled = {slot.match_id for slot in match_slots}
        for match in matches:
            if match.is_bye or match.id in scheduled:
                continue
            result.add_violation(SchedulingConstraint(
                constraint_type="unscheduled_match",
                severity="hard",
                description=f"Match {match.id} has no time slot",
                affected_teams=match.team_ids,
                affected_matches=[match.id],
                penalty_score=HARD_PENALTY
            ))

    def _check_day_window(self, match_slots: List[TimeSlot], settings: ScheduleSettings,
                          result: ScheduleValidationResult):
        day_start = time_to_minutes(settings.start_time)
        day_end = time_to_minutes(settings.end_time)
        for slot in match_slots:
            if time_to_minutes(slot.start_time) < day_start or time_to_minutes(slot.end_time) > day_end:
                result.add_violation(SchedulingConstraint(
                    constraint_type="outside_day_window",
                    severity="hard",
                    description=f"{slot} falls outside {settings.start_time}-{settings.end_time}",
                    affected_matches=[slot.match_id],
                    penalty_score=HARD_PENALTY
                ))

    def _check_break_overlaps(self, match_slots: List[TimeSlot], settings: ScheduleSettings,
                              result: ScheduleValidationResult):
        windows = ([settings.lunch_break] if settings.lunch_break else []) + list(settings.break_times)
        for slot in match_slots:
            window = find_overlapping_window(
                time_to_minutes(slot.start_time), time_to_minutes(slot.end_time), windows
            )
            if window is not None:
                result.add_violation(SchedulingConstraint(
                    constraint_type="break_overlap",
                    severity="hard",
                    description=f"{slot} overlaps {window.title or 'break'} {window.start_time}-{window.end_time}",
                    affected_matches=[slot.match_id],
                    penalty_score=HARD_PENALTY
                ))

    def _check_simultaneous_matches(self, match_slots: List[TimeSlot], matches_by_id: Dict[str, Match],
                                    class_map: Dict[str, str], result: ScheduleValidationResult):
        """Overlapping matches need different courts, different teams and different classes."""
        for first, second in combinations(match_slots, 2):
            if not intervals_overlap(
                time_to_minutes(first.start_time), time_to_minutes(first.end_time),
                time_to_minutes(second.start_time), time_to_minutes(second.end_time)
            ):
                continue

            affected = [first.match_id, second.match_id]
            if first.court_id == second.court_id:
                result.add_violation(SchedulingConstraint(
                    constraint_type="court_conflict",
                    severity="hard",
                    description=f"{first} and {second} share court {first.court_id}",
                    affected_matches=affected,
                    penalty_score=HARD_PENALTY
                ))

            match_a = matches_by_id.get(first.match_id)
            match_b = matches_by_id.get(second.match_id)
            if match_a is None or match_b is None:
                continue

            shared_teams = set(match_a.team_ids) & set(match_b.team_ids)
            if shared_teams:
                result.add_violation(SchedulingConstraint(
                    constraint_type="team_double_booking",
                    severity="hard",
                    description=f"Team(s) {', '.join(sorted(shared_teams))} play {match_a.id} and {match_b.id} at once",
                    affected_teams=sorted(shared_teams),
                    affected_matches=affected,
                    penalty_score=HARD_PENALTY
                ))
                continue

            shared_classes = match_classes(match_a, class_map) & match_classes(match_b, class_map)
            if shared_classes:
                result.add_violation(SchedulingConstraint(
                    constraint_type="class_conflict",
                    severity="hard",
                    description=f"Class(es) {', '.join(sorted(shared_classes))} needed in {match_a.id} and {match_b.id} at once",
                    affected_teams=match_a.team_ids + match_b.team_ids,
                    affected_matches=affected,
                    penalty_score=HARD_PENALTY
                ))
