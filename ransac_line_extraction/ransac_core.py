"""
Core RANSAC Line Extraction.

This module provides the RANSAC driver for angularly sorted scan data:
- RansacParams: immutable trial configuration
- TrialOutcome: how a single trial ended
- Ransac: runs trials over a working node array and collects lines
"""

import logging
import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .geometry import NODE_DTYPE, Line, fit_line, squared_distance
from .partition import pop_node, restore_trial


@dataclass(frozen=True)
class RansacParams:
    """Trial configuration, fixed for the lifetime of a Ransac instance."""
    max_trials: int
    sample_size: int
    sample_deviation: float
    proximity_epsilon: float
    line_consensus: int

    def __post_init__(self):
        for name in ('max_trials', 'sample_size', 'line_consensus'):
            if getattr(self, name) < 0:
                raise ValueError(f'{name} must be non-negative, got {getattr(self, name)}')
        for name in ('sample_deviation', 'proximity_epsilon'):
            if getattr(self, name) < 0.0:
                raise ValueError(f'{name} must be non-negative, got {getattr(self, name)}')


class TrialOutcome(Enum):
    """Result of a single RANSAC trial."""
    ACCEPTED = 'accepted'
    SEED_TOO_SMALL = 'seed_too_small'
    SEED_FIT_FAILED = 'seed_fit_failed'
    NO_CONSENSUS = 'no_consensus'
    REFIT_FAILED = 'refit_failed'


class Ransac:
    """
    Sequential RANSAC line extraction for angularly sorted 2D points.

    Each trial seeds a cluster from a random node and its angular
    neighbours, fits a regression line, pulls in every active node close
    to it and keeps the line if enough nodes agree. Nodes of an accepted
    line are consumed; a failed trial is rolled back.
    """

    def __init__(
        self,
        max_nodes: int,
        max_trials: int = 100,
        sample_size: int = 4,
        sample_deviation: float = 0.1,
        proximity_epsilon: float = 0.05,
        line_consensus: int = 10,
        random_seed: Optional[int] = None,
        logger=None
    ):
        """
        Initialize RANSAC line extraction.

        Args:
            max_nodes: Largest number of nodes compute() will be given
            max_trials: Number of trials per compute() call
            sample_size: Neighbour picks when growing a seed cluster
            sample_deviation: Max angular gap between a neighbour and the seed
            proximity_epsilon: Max perpendicular distance of a line member
            line_consensus: Min number of members for a line to be accepted
            random_seed: Optional seed for reproducibility
            logger: Object with debug()/info() methods, e.g. a logging.Logger
                or an rclpy node logger. Defaults to this module's logger.
        """
        if max_nodes < 0:
            raise ValueError(f'max_nodes must be non-negative, got {max_nodes}')

        self.max_nodes = max_nodes
        self.params = RansacParams(
            max_trials=max_trials,
            sample_size=sample_size,
            sample_deviation=sample_deviation,
            proximity_epsilon=proximity_epsilon,
            line_consensus=line_consensus
        )
        self.rng = np.random.default_rng(random_seed)
        self.logger = logger if logger is not None else logging.getLogger(__name__)

        # Reused by every rollback
        self._scratch = np.empty(max_nodes, dtype=NODE_DTYPE)

        self._lines: List[Line] = []
        self._spans: List[Tuple[int, int]] = []
        self._outcomes: List[TrialOutcome] = []

    @property
    def lines(self) -> Tuple[Line, ...]:
        """Lines accepted by the last compute(), in acceptance order."""
        return tuple(self._lines)

    @property
    def line_spans(self) -> Tuple[Tuple[int, int], ...]:
        """Half-open index ranges of each accepted line's member nodes."""
        return tuple(self._spans)

    @property
    def trial_outcomes(self) -> Tuple[TrialOutcome, ...]:
        """Outcome of every trial run by the last compute()."""
        return tuple(self._outcomes)

    def compute(self, nodes: np.ndarray, size: Optional[int] = None) -> Tuple[Line, ...]:
        """
        Extract lines from nodes[:size].

        The nodes must be sorted by ascending angle. The array is reordered
        in place: after the call, the members of each accepted line sit in a
        contiguous block listed in line_spans.

        Args:
            nodes: Structured array with dtype NODE_DTYPE
            size: Number of valid nodes, defaults to len(nodes)

        Returns:
            Accepted lines, also available through the lines property
        """
        if nodes.dtype != NODE_DTYPE:
            raise ValueError(f'nodes must have dtype {NODE_DTYPE}, got {nodes.dtype}')
        if size is None:
            size = len(nodes)
        if not 0 <= size <= min(len(nodes), self.max_nodes):
            raise ValueError(
                f'size {size} exceeds capacity (array: {len(nodes)}, max_nodes: {self.max_nodes})'
            )

        self._lines.clear()
        self._spans.clear()
        self._outcomes.clear()

        max_trials = self.params.max_trials
        self.logger.debug(f'Starting {max_trials} trials on {size} nodes')

        trial_count = 0
        while size > 0 and trial_count < max_trials:
            size = self._run_trial(nodes, size)
            trial_count += 1

        self.logger.debug(
            f'Finished RANSAC: {len(self._lines)} lines in {trial_count} trials, '
            f'{size} nodes unassigned'
        )
        return self.lines

    def _run_trial(self, nodes: np.ndarray, size: int) -> int:
        """Run one trial and return the active size after it."""
        original_trial_size = size

        size = self._grow_seed(nodes, size)

        outcome, line, size = self._evaluate(nodes, size, original_trial_size)
        self._outcomes.append(outcome)

        if outcome is TrialOutcome.ACCEPTED:
            self._lines.append(line)
            self._spans.append((size, original_trial_size))
            self.logger.debug(
                f'Accepted line slope={line.slope:.3f} intercept={line.intercept:.3f} '
                f'with {original_trial_size - size} nodes'
            )
            return size

        self.logger.debug(f'Trial failed ({outcome.value}), restoring {original_trial_size} nodes')
        return restore_trial(nodes, original_trial_size, self._scratch)

    def _grow_seed(self, nodes: np.ndarray, size: int) -> int:
        """Pop a random reference node and its angular neighbours."""
        ref_index = int(self.rng.integers(size))
        ref_angle = nodes['angle'][ref_index]
        self.logger.debug(f'Reference index {ref_index} (angle {ref_angle:.4f})')

        for i in range(self.params.sample_size):
            # Alternate left and right of the reference
            if i % 2 == 0:
                pick = (ref_index - 1 + size) % size
            else:
                pick = (ref_index + 1) % size

            if pick != ref_index and abs(nodes['angle'][pick] - ref_angle) <= self.params.sample_deviation:
                size = pop_node(pick, nodes, size)
                if pick < ref_index:
                    ref_index -= 1

        return pop_node(ref_index, nodes, size)

    def _evaluate(
        self,
        nodes: np.ndarray,
        size: int,
        original_trial_size: int
    ) -> Tuple[TrialOutcome, Optional[Line], int]:
        """Fit the seed, associate nodes and refit the line."""
        if original_trial_size - size < 2:
            return TrialOutcome.SEED_TOO_SMALL, None, size

        seed_fit = fit_line(size, original_trial_size, nodes)
        if not seed_fit.ok:
            self.logger.debug(f'Seed fit failed: {seed_fit.status.value}')
            return TrialOutcome.SEED_FIT_FAILED, None, size

        size = self._associate(seed_fit.line, nodes, size)

        popped = original_trial_size - size
        self.logger.debug(f'{popped} nodes associated to the seed line')
        if popped < self.params.line_consensus:
            return TrialOutcome.NO_CONSENSUS, None, size

        final_fit = fit_line(size, original_trial_size, nodes)
        if not final_fit.ok:
            return TrialOutcome.REFIT_FAILED, None, size

        return TrialOutcome.ACCEPTED, final_fit.line, size

    def _associate(self, line: Line, nodes: np.ndarray, size: int) -> int:
        """Pop every active node within proximity_epsilon of the line."""
        dst2 = squared_distance(line, nodes['x'][:size], nodes['y'][:size])
        close = np.flatnonzero(dst2 <= self.params.proximity_epsilon ** 2)

        # High to low so pops never shift an index still to be visited
        for i in close[::-1]:
            size = pop_node(int(i), nodes, size)
        return size
