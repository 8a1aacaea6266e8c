"""
Segment layout generator.

Grows a dungeon outward from a hub by attaching unique segment templates to
open entry points:

    INITIALIZING -> EXPANDING -> SUCCESS | EXHAUSTED

- INITIALIZING places the first hub template at the root origin and seeds
  the frontier with its entry points. Hub templates never join the pool.
- EXPANDING repeatedly picks a random frontier entry point, asks the matcher
  for compatible templates, and validates up to max_tries_per_entrance of
  them in shuffled order. The first valid candidate is accepted and removed
  from the pool; its remaining entry points join the frontier. The picked
  entry point leaves the frontier whatever the outcome.
- The loop stops when the frontier or the pool is empty, or the segment cap
  is reached. All of these are SUCCESS. EXHAUSTED means no hub was found.

Every random choice comes from one random.Random seeded per run, so the same
seed and the same template order reproduce the same layout.
"""

import logging
import random
import time
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Set

from ..segments import (
    ORIGIN, BlockPos, ConfigurationError, EntryPoint, PlacedSegment, SegmentTemplate, VaultColor,
)
from .blueprint import Blueprint, assemble_blueprint
from .matcher import find_candidates, match_candidate
from .spatial_validation import DEFAULT_MAX_DISTANCE, PlacementValidator

logger = logging.getLogger(__name__)

DEFAULT_MAX_SEGMENTS = 50
DEFAULT_MAX_TRIES_PER_ENTRANCE = 5


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class LayoutGenerationError(Exception):
    pass


class GenerationCancelledException(LayoutGenerationError):
    pass


class GenerationTimeoutError(GenerationCancelledException):
    pass


# ---------------------------------------------------------------------------
# State / result
# ---------------------------------------------------------------------------

class GeneratorState(Enum):
    INITIALIZING = "initializing"
    EXPANDING = "expanding"
    SUCCESS = "success"
    EXHAUSTED = "exhausted"


@dataclass
class LayoutStatistics:
    iterations: int = 0
    dead_ends: int = 0
    exhausted_entries: int = 0
    depth_limited: int = 0
    rejections: Dict[str, int] = field(default_factory=dict)
    elapsed: float = 0.0

    def to_dict(self) -> Dict[str, object]:
        return {
            'iterations': self.iterations,
            'dead_ends': self.dead_ends,
            'exhausted_entries': self.exhausted_entries,
            'depth_limited': self.depth_limited,
            'rejections': dict(self.rejections),
            'elapsed': self.elapsed,
        }


@dataclass
class LayoutResult:
    state: GeneratorState
    seed: int
    blueprint: Optional[Blueprint] = None
    stats: LayoutStatistics = field(default_factory=LayoutStatistics)
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.state == GeneratorState.SUCCESS

    @property
    def only_hub_placed(self) -> bool:
        """Degenerate but valid outcome: nothing could attach to the hub."""
        return self.blueprint is not None and self.blueprint.only_hub_placed

    @property
    def segment_count(self) -> int:
        return self.blueprint.segment_count if self.blueprint else 0


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------

class SegmentLayoutGenerator:
    """Randomized frontier-expansion generator over a pool of unique templates."""

    def __init__(
        self,
        templates: Sequence[SegmentTemplate],
        seed: Optional[int] = None,
        max_distance: float = DEFAULT_MAX_DISTANCE,
        max_segments: int = DEFAULT_MAX_SEGMENTS,
        max_tries_per_entrance: int = DEFAULT_MAX_TRIES_PER_ENTRANCE,
        max_depth: Optional[int] = None,
        prioritize_features: bool = False,
        root_origin: BlockPos = ORIGIN,
        timeout_seconds: Optional[float] = None,
        cancel_check: Optional[Callable[[], bool]] = None,
    ):
        """
        Args:
            templates: Template pool; order matters for reproducibility
            seed: Random seed (None = pick one at random)
            max_distance: Maximum Euclidean distance of an origin from root
            max_segments: Hard cap on accepted placements, hub included
            max_tries_per_entrance: Candidates validated per frontier visit
            max_depth: Segments at this depth are not expanded (None = no limit)
            prioritize_features: Try templates holding missing vaults/keys first
            root_origin: Where the hub is placed
            timeout_seconds: Abort after this long (None = no limit)
            cancel_check: Polled every iteration; returning True cancels

        Raises:
            ValueError: If a numeric limit is out of range
            ConfigurationError: If two templates share a name
        """
        if max_segments < 1:
            raise ValueError("max_segments must be at least 1")
        if max_tries_per_entrance < 1:
            raise ValueError("max_tries_per_entrance must be at least 1")
        if max_distance < 0:
            raise ValueError("max_distance must not be negative")
        if max_depth is not None and max_depth < 1:
            raise ValueError("max_depth must be at least 1")

        seen: Set[str] = set()
        for template in templates:
            if template.name in seen:
                raise ConfigurationError("Duplicate template name in pool", template.name)
            seen.add(template.name)

        self.templates = list(templates)
        self.seed = seed if seed is not None else random.randint(0, 2**31 - 1)
        self.max_distance = max_distance
        self.max_segments = max_segments
        self.max_tries_per_entrance = max_tries_per_entrance
        self.max_depth = max_depth
        self.prioritize_features = prioritize_features
        self.root_origin = root_origin
        self.timeout_seconds = timeout_seconds
        self.cancel_check = cancel_check

        self.state = GeneratorState.INITIALIZING
        self.is_cancelled = False

    # -- helpers --

    def cancel(self):
        self.is_cancelled = True

    def _check_cancellation(self, deadline: Optional[float]):
        if self.is_cancelled or (self.cancel_check is not None and self.cancel_check()):
            raise GenerationCancelledException("Layout generation cancelled")
        if deadline is not None and time.monotonic() > deadline:
            raise GenerationTimeoutError(
                f"Layout generation exceeded {self.timeout_seconds:.2f}s")

    def _order_candidates(
        self,
        candidates: List[SegmentTemplate],
        rng: random.Random,
        vaults_placed: Set[VaultColor],
        keys_placed: Set[VaultColor],
    ) -> List[SegmentTemplate]:
        """Shuffle candidates into the order they will be tried."""
        if not self.prioritize_features:
            queue = list(candidates)
            rng.shuffle(queue)
            return queue

        tiers: List[List[SegmentTemplate]] = [[], [], [], []]
        for template in candidates:
            if template.contained_vault is not None and template.contained_vault not in vaults_placed:
                tiers[0].append(template)
            elif template.contained_key is not None and template.contained_key not in keys_placed:
                tiers[1].append(template)
            elif template.is_puzzle_room:
                tiers[2].append(template)
            else:
                tiers[3].append(template)
        queue = []
        for tier in tiers:
            rng.shuffle(tier)
            queue.extend(tier)
        return queue

    # -- main entry --

    def generate(self) -> LayoutResult:
        """
        Run one generation.

        Returns:
            LayoutResult with state SUCCESS and a blueprint, or EXHAUSTED with
            errors when no hub template is available

        Raises:
            GenerationCancelledException: If cancelled or timed out
            InvariantViolation: On internal inconsistencies
        """
        start_time = time.monotonic()
        deadline = start_time + self.timeout_seconds if self.timeout_seconds is not None else None
        self.state = GeneratorState.INITIALIZING
        self.is_cancelled = False
        rng = random.Random(self.seed)
        stats = LayoutStatistics()
        result = LayoutResult(state=self.state, seed=self.seed, stats=stats)
        logger.info("Layout generation seed: %d (%d templates)", self.seed, len(self.templates))

        hub_template = next((t for t in self.templates if t.is_hub), None)
        if hub_template is None:
            self.state = GeneratorState.EXHAUSTED
            result.state = self.state
            result.errors.append("No hub template available")
            logger.error("Cannot generate layout: no hub template in pool")
            return result

        pool = [t for t in self.templates if not t.is_hub]
        hub = PlacedSegment(template=hub_template, origin=self.root_origin, depth=0, index=0)
        placed: List[PlacedSegment] = [hub]
        validator = PlacementValidator(self.root_origin, self.max_distance)
        validator.accept(hub)
        frontier: List[EntryPoint] = hub.open_entry_points()
        open_entries: List[EntryPoint] = []
        vaults_placed: Set[VaultColor] = set()
        keys_placed: Set[VaultColor] = set()
        if hub_template.contained_vault is not None:
            vaults_placed.add(hub_template.contained_vault)
        if hub_template.contained_key is not None:
            keys_placed.add(hub_template.contained_key)
        rejections: Counter = Counter()

        self.state = GeneratorState.EXPANDING
        while frontier and pool and len(placed) < self.max_segments:
            self._check_cancellation(deadline)
            stats.iterations += 1

            entry = frontier.pop(rng.randrange(len(frontier)))
            parent = placed[entry.segment_index]

            if self.max_depth is not None and parent.depth >= self.max_depth:
                stats.depth_limited += 1
                open_entries.append(entry)
                continue

            candidates = find_candidates(entry, pool)
            if not candidates:
                logger.debug("Dead end at %s (no compatible template)", entry)
                stats.dead_ends += 1
                open_entries.append(entry)
                continue

            queue = self._order_candidates(candidates, rng, vaults_placed, keys_placed)
            accepted = None
            for template in queue[:self.max_tries_per_entrance]:
                candidate = match_candidate(entry, template, parent, len(placed))
                rejection = validator.validate(candidate)
                if rejection is None:
                    accepted = candidate
                    break
                rejections[rejection.reason.value] += 1
                logger.debug("Rejected %s", rejection)

            if accepted is None:
                stats.exhausted_entries += 1
                open_entries.append(entry)
                continue

            pool = [t for t in pool if t is not accepted.template]
            placed.append(accepted)
            validator.accept(accepted)
            frontier.extend(accepted.open_entry_points())
            if accepted.template.contained_vault is not None:
                vaults_placed.add(accepted.template.contained_vault)
            if accepted.template.contained_key is not None:
                keys_placed.add(accepted.template.contained_key)
            logger.debug("Placed %s", accepted)

        # Whatever is left on the frontier stays open for the world layer to cap
        open_entries.extend(frontier)
        stats.rejections = dict(rejections)
        stats.elapsed = time.monotonic() - start_time

        result.blueprint = assemble_blueprint(placed, open_entries, seed=self.seed)
        self.state = GeneratorState.SUCCESS
        result.state = self.state
        logger.info("Layout complete: %d segments, %d open entry points, %d iterations in %.3fs",
                    len(placed), len(open_entries), stats.iterations, stats.elapsed)
        if result.only_hub_placed:
            logger.warning("Only the hub was placed (seed %d)", self.seed)
        return result


def generate_segment_layout(
    templates: Sequence[SegmentTemplate],
    seed: Optional[int] = None,
    max_distance: float = DEFAULT_MAX_DISTANCE,
    max_segments: int = DEFAULT_MAX_SEGMENTS,
    max_tries_per_entrance: int = DEFAULT_MAX_TRIES_PER_ENTRANCE,
    root_origin: BlockPos = ORIGIN,
    **kwargs,
) -> LayoutResult:
    """
    Generate a segment layout in one call.

    Args:
        templates: Template pool (exactly one run consumes each template once)
        seed: Random seed for reproducibility (None = random)
        max_distance: Maximum distance of a segment origin from the root
        max_segments: Cap on accepted placements, hub included
        max_tries_per_entrance: Candidates validated per frontier visit
        root_origin: Where the hub is placed
        **kwargs: Further SegmentLayoutGenerator options

    Returns:
        LayoutResult
    """
    generator = SegmentLayoutGenerator(
        templates,
        seed=seed,
        max_distance=max_distance,
        max_segments=max_segments,
        max_tries_per_entrance=max_tries_per_entrance,
        root_origin=root_origin,
        **kwargs,
    )
    return generator.generate()
