"""
Court scheduler for the Sports Day competition engine.

Places every playable match of a sport onto one or two courts with a greedy
time sweep:

- lunch and break windows are fixed and always appear in the timetable
- a match never overlaps lunch or a break
- matches running at the same time share neither a team nor a class
- a bracket round only starts once every match of the previous round is placed

A failure aborts the whole run with a SchedulingError; no partial timetable
is ever returned.
"""

import random
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from sportsday.core.config import (
    COURT_IDS, MAX_COURTS, DEADLOCK_STEP_MINUTES, MAX_BREAK_ADJUSTMENTS, MESSAGES
)
from sportsday.core.exceptions import (
    InvalidSettingsError, NoSchedulableMatchesError,
    BreaksTooDenseError, WindowTooShortError
)
from sportsday.core.logging_config import get_logger
from sportsday.models import (
    Match, ScheduleSettings, SlotType, Sport, SportType, TimeSlot
)
from sportsday.services.bracket import round_label
from sportsday.services.conflicts import build_class_map, match_classes
from sportsday.services.playoff import is_placeholder, placeholder_name
from sportsday.services.time_utils import (
    find_overlapping_window, minutes_to_time, time_to_minutes
)

logger = get_logger(__name__)

GROUP_STAGE = 0


@dataclass
class QueuedMatch:
    """A match waiting for a court; ``stage`` orders bracket rounds."""
    match: Match
    stage: int = GROUP_STAGE


class CourtScheduler:
    """
    Builds the timetable for one sport.

    One instance serves exactly one run; all working state lives on the
    instance and the given sport and settings are never modified.
    """

    def __init__(
        self,
        sport: Sport,
        settings: ScheduleSettings,
        shuffle: bool = True,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize the scheduler.

        Args:
            sport: Sport whose matches are scheduled
            settings: Day window, durations, courts and breaks
            shuffle: Randomize match order within each round; when False the
                order of ``settings.time_slots`` (or the input order) is kept
            rng: Random source, for reproducible timetables
        """
        self.sport = sport
        self.settings = settings
        self.shuffle = shuffle
        self.rng = rng or random.Random()

        self._validate_settings()

        self.start = time_to_minutes(settings.start_time)
        self.end = time_to_minutes(settings.end_time)
        self.duration = settings.match_duration
        self.gap = settings.break_duration
        self.court_ids = list(COURT_IDS[:settings.court_count])
        self.windows = ([settings.lunch_break] if settings.lunch_break else []) + list(settings.break_times)

        self.class_map = build_class_map(sport.teams, settings.team_classes)
        self.team_names = {team.id: team.name for team in sport.teams}
        self.prior_order = self._prior_match_order()

        self.clock = self.start
        self.slots: List[TimeSlot] = []
        self.max_round = max((m.round for m in sport.matches if not m.block_id), default=1)

    def _validate_settings(self):
        settings = self.settings
        if settings.court_count < 1 or settings.court_count > MAX_COURTS:
            raise InvalidSettingsError(f"Court count must be between 1 and {MAX_COURTS}, got {settings.court_count}")
        if settings.match_duration <= 0:
            raise InvalidSettingsError(f"Match duration must be positive, got {settings.match_duration}")
        if settings.break_duration < 0 or settings.break_between_stages < 0:
            raise InvalidSettingsError("Break durations cannot be negative")
        times = [settings.start_time, settings.end_time]
        for window in [settings.lunch_break] + list(settings.break_times):
            if window:
                times.extend([window.start_time, window.end_time])
        for slot in settings.time_slots:
            times.extend([slot.start_time, slot.end_time])
        try:
            for value in times:
                time_to_minutes(value)
        except ValueError as e:
            raise InvalidSettingsError(str(e)) from e
        if time_to_minutes(settings.start_time) >= time_to_minutes(settings.end_time):
            raise InvalidSettingsError(
                f"Start time {settings.start_time} must be before end time {settings.end_time}"
            )

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def generate(self) -> List[TimeSlot]:
        """
        Generate the timetable.

        Returns:
            Time slots sorted by start time (stable)

        Raises:
            NoSchedulableMatchesError: The sport has nothing to place
            BreaksTooDenseError: Breaks keep pushing the clock past the cap
            WindowTooShortError: Matches do not fit before the end time
        """
        if self.sport.type == SportType.RANKING:
            return [TimeSlot(
                start_time=self.settings.start_time,
                end_time=self.settings.end_time,
                type=SlotType.PREPARATION,
                title=self.sport.name,
                description="Ranking competition"
            )]

        self._add_fixed_slots()

        if self.sport.type == SportType.LEAGUE:
            self._schedule_league()
        else:
            queue = self._build_flat_queue()
            if not queue:
                raise NoSchedulableMatchesError(MESSAGES["schedule.noMatches"])
            self._run(queue)

        ordered = sorted(self.slots, key=lambda slot: time_to_minutes(slot.start_time))
        match_count = sum(1 for slot in ordered if slot.type == SlotType.MATCH)
        logger.info(
            f"Scheduled {match_count} matches for '{self.sport.name}' on {len(self.court_ids)} court(s), "
            f"{self.settings.start_time}-{minutes_to_time(self.clock)}"
        )
        return ordered

    # ------------------------------------------------------------------
    # Queue building
    # ------------------------------------------------------------------

    def _prior_match_order(self) -> Dict[str, int]:
        """Position of each match in the previous timetable, if there is one."""
        court_rank = {court_id: index for index, court_id in enumerate(COURT_IDS)}
        previous = [
            slot for slot in self.settings.time_slots
            if slot.type == SlotType.MATCH and slot.match_id
        ]
        previous.sort(key=lambda s: (time_to_minutes(s.start_time), court_rank.get(s.court_id, len(court_rank))))
        order = {}
        for slot in previous:
            order.setdefault(slot.match_id, len(order))
        return order

    def _arrange(self, matches: List[Match]) -> List[Match]:
        """Shuffle, or keep the previous timetable's order, or keep input order."""
        matches = list(matches)
        if self.shuffle:
            self.rng.shuffle(matches)
        elif self.prior_order:
            fallback = len(self.prior_order)
            matches.sort(key=lambda m: self.prior_order.get(m.id, fallback))
        return matches

    def _playable(self, matches: List[Match]) -> List[Match]:
        return [match for match in matches if not match.is_bye]

    def _by_round(self, matches: List[Match]) -> List[QueuedMatch]:
        rounds = defaultdict(list)
        for match in matches:
            rounds[match.round].append(match)

        queue = []
        for round_number in sorted(rounds):
            queue.extend(QueuedMatch(match, round_number) for match in self._arrange(rounds[round_number]))
        return queue

    def _build_flat_queue(self) -> List[QueuedMatch]:
        matches = self._playable(self.sport.matches)
        if self.sport.type == SportType.TOURNAMENT:
            return self._by_round(matches)
        return [QueuedMatch(match) for match in self._arrange(matches)]

    def _interleave_blocks(self, matches: List[Match]) -> List[QueuedMatch]:
        """One match from each block in turn, so no block finishes late."""
        if not self.shuffle and self.prior_order:
            return [QueuedMatch(match) for match in self._arrange(matches)]

        blocks: Dict[str, List[Match]] = {}
        for match in matches:
            blocks.setdefault(match.block_id, []).append(match)
        per_block = [self._arrange(block_matches) for block_matches in blocks.values()]

        queue = []
        for index in range(max((len(b) for b in per_block), default=0)):
            for block_matches in per_block:
                if index < len(block_matches):
                    queue.append(QueuedMatch(block_matches[index]))
        return queue

    # ------------------------------------------------------------------
    # League
    # ------------------------------------------------------------------

    def _is_final(self, match: Match) -> bool:
        return match.round == self.max_round and (match.match_number == 1 or match.is_third_place)

    def _schedule_league(self):
        group = self._playable([m for m in self.sport.matches if m.block_id])
        playoff = self._playable([m for m in self.sport.matches if not m.block_id])
        if playoff and not self.sport.league_settings.has_playoff:
            logger.info(f"'{self.sport.name}' has no playoff, skipping {len(playoff)} playoff match(es)")
            playoff = []
        if not group and not playoff:
            raise NoSchedulableMatchesError(MESSAGES["schedule.noMatches"])

        if group:
            self._run(self._interleave_blocks(group))

        if group and playoff and self.settings.break_between_stages > 0:
            self._add_stage_break()

        finals = [m for m in playoff if self._is_final(m)]
        self._run(self._by_round([m for m in playoff if not self._is_final(m)]))

        final = next((m for m in finals if not m.is_third_place), None)
        third_place = next((m for m in finals if m.is_third_place), None)
        self._schedule_finals(final, third_place)

    def _add_stage_break(self):
        self._align_clock(self.settings.break_between_stages)
        start = self.clock
        self.clock += self.settings.break_between_stages
        self.slots.append(TimeSlot(
            start_time=minutes_to_time(start),
            end_time=minutes_to_time(self.clock),
            type=SlotType.BREAK,
            title="Stage break",
            description="Break between group stage and playoff"
        ))
        logger.debug(f"Stage break {minutes_to_time(start)}-{minutes_to_time(self.clock)}")

    def _schedule_finals(self, final: Optional[Match], third_place: Optional[Match]):
        """Final and third-place match go last: side by side, or third place first."""
        if final and third_place and len(self.court_ids) >= 2:
            self._align_clock()
            self._check_fits()
            self._place(final, self.court_ids[0])
            self._place(third_place, self.court_ids[1])
            self._advance()
            return

        for match in (third_place, final):
            if match is None:
                continue
            self._align_clock()
            self._check_fits()
            self._place(match, self.court_ids[0])
            self._advance()

    # ------------------------------------------------------------------
    # Time sweep
    # ------------------------------------------------------------------

    def _add_fixed_slots(self):
        lunch = self.settings.lunch_break
        if lunch:
            self.slots.append(TimeSlot(
                start_time=lunch.start_time,
                end_time=lunch.end_time,
                type=SlotType.LUNCH,
                title=lunch.title or "Lunch Break"
            ))
        for window in self.settings.break_times:
            self.slots.append(TimeSlot(
                start_time=window.start_time,
                end_time=window.end_time,
                type=SlotType.BREAK,
                title=window.title or "Break"
            ))

    def _align_clock(self, length: Optional[int] = None):
        """Push the clock past any lunch/break window the next match (or ``length`` minutes) would overlap."""
        length = self.duration if length is None else length
        for _ in range(MAX_BREAK_ADJUSTMENTS + 1):
            window = find_overlapping_window(self.clock, self.clock + length, self.windows)
            if window is None:
                return
            self.clock = time_to_minutes(window.end_time)
            logger.debug(f"Clock moved past '{window.title or 'break'}' to {minutes_to_time(self.clock)}")
        raise BreaksTooDenseError(MESSAGES["schedule.breaksTooDense"])

    def _check_fits(self):
        if self.clock + self.duration > self.end:
            raise WindowTooShortError(
                f"{MESSAGES['schedule.windowTooShort']}: a match starting at {minutes_to_time(self.clock)} "
                f"would end after {self.settings.end_time}"
            )

    def _advance(self):
        self.clock += self.duration + self.gap

    def _run(self, queue: List[QueuedMatch]):
        """
        Place queued matches time slot by time slot until the queue is empty.

        Each court takes the first queued match of the lowest pending stage
        whose teams and classes are still free in this time slot.
        """
        queue = list(queue)
        while queue:
            self._align_clock()
            self._check_fits()

            stage = min(entry.stage for entry in queue)
            used_teams: Set[str] = set()
            used_classes: Set[str] = set()
            placed = 0

            for court_id in self.court_ids:
                entry = self._take_eligible(queue, stage, used_teams, used_classes)
                if entry is None:
                    continue
                used_teams.update(entry.match.team_ids)
                used_classes.update(match_classes(entry.match, self.class_map))
                self._place(entry.match, court_id)
                placed += 1

            if placed:
                self._advance()
            else:
                logger.debug(f"No match fits at {minutes_to_time(self.clock)}, waiting {DEADLOCK_STEP_MINUTES} minutes")
                self.clock += DEADLOCK_STEP_MINUTES

    def _take_eligible(
        self,
        queue: List[QueuedMatch],
        stage: int,
        used_teams: Set[str],
        used_classes: Set[str]
    ) -> Optional[QueuedMatch]:
        for index, entry in enumerate(queue):
            if entry.stage != stage:
                continue
            if used_teams & set(entry.match.team_ids):
                continue
            if used_classes & match_classes(entry.match, self.class_map):
                continue
            return queue.pop(index)
        return None

    def _place(self, match: Match, court_id: str):
        start = self.clock
        slot = TimeSlot(
            start_time=minutes_to_time(start),
            end_time=minutes_to_time(start + self.duration),
            type=SlotType.MATCH,
            court_id=court_id,
            match_id=match.id,
            title=self._match_title(match),
            description=f"{self._stage_label(match)} - {self.settings.court_name(court_id)}"
        )
        self.slots.append(slot)
        logger.debug(f"Placed {slot}")

    def _team_label(self, team_id: str) -> str:
        if is_placeholder(team_id):
            return placeholder_name()
        return self.team_names.get(team_id, team_id) or "TBD"

    def _match_title(self, match: Match) -> str:
        return f"{self._team_label(match.team1_id)} vs {self._team_label(match.team2_id)}"

    def _stage_label(self, match: Match) -> str:
        if match.block_id:
            return f"Group stage: {match.block_id}"
        if match.is_third_place:
            return "Third place match"
        if self.sport.type == SportType.ROUND_ROBIN:
            return "Round robin"
        return round_label(match.round, self.max_round)


def generate_schedule(
    sport: Sport,
    settings: Optional[ScheduleSettings] = None,
    shuffle: bool = True,
    rng: Optional[random.Random] = None
) -> List[TimeSlot]:
    """
    Generate the timetable for a sport.

    Args:
        sport: Sport with teams and matches
        settings: Schedule settings, defaults to the sport's own
        shuffle: Randomize order within rounds
        rng: Random source, for reproducible timetables

    Returns:
        Time slots sorted by start time
    """
    settings = settings or sport.schedule_settings or ScheduleSettings()
    return CourtScheduler(sport, settings, shuffle=shuffle, rng=rng).generate()
