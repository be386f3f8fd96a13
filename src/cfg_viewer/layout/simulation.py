"""Force-directed layout simulation over a visible subgraph.

Design Decision: explicit fixed-step solver

The simulation owns no timer. ``step()`` advances it by a bounded number of
relaxation iterations and returns a snapshot; whoever owns the clock decides
when to call it (see ``LayoutRunner``). Tests drive it directly.

Per iteration, in order:
    1. alpha moves toward alpha_target by alpha_decay
    2. link, many-body, center and collision forces update velocities
    3. free nodes integrate ``x += v *= (1 - velocity_decay)``;
       pinned nodes snap to their pin point with zero velocity

Node state lives in ``(n, 2)`` arrays indexed by a per-run index; the id →
index map is stable for the lifetime of the run.
"""

from __future__ import annotations

import math
from collections.abc import Mapping

import numpy as np
from loguru import logger

from ..config.defaults import ALPHA_START, INITIAL_RADIUS
from ..config.settings import LayoutSettings
from ..core.models import GraphEdge, VisibleSubgraph
from .forces import (
    LinkSet,
    apply_center_force,
    apply_collision_force,
    apply_link_force,
    apply_many_body_force,
)
from .snapshot import EdgeLabelPosition, EdgePosition, NodePosition, PositionsSnapshot

# Golden-angle increment for phyllotaxis placement
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))


class ForceSimulation:
    """Point-mass simulation of one visible subgraph."""

    def __init__(
        self,
        subgraph: VisibleSubgraph,
        settings: LayoutSettings | None = None,
        seed_positions: Mapping[int, tuple[float, float]] | None = None,
        random_seed: int = 0,
    ) -> None:
        """Set up node arrays and springs for ``subgraph``.

        Args:
            subgraph: Nodes and edges to lay out
            settings: Force parameters (defaults when omitted)
            seed_positions: Previous positions of nodes that persist across a
                restart; other nodes start on a phyllotaxis spiral
            random_seed: Seed for the jiggle applied to coincident points
        """
        self.settings = settings or LayoutSettings()
        self.subgraph = subgraph
        self._rng = np.random.default_rng(random_seed)

        self.node_ids: tuple[int, ...] = tuple(node.id for node in subgraph.nodes)
        self._index: dict[int, int] = {nid: i for i, nid in enumerate(self.node_ids)}
        n = len(self.node_ids)

        self.pos = self._initial_positions(seed_positions or {})
        self.vel = np.zeros((n, 2), dtype=np.float64)
        self.fixed = np.full((n, 2), np.nan, dtype=np.float64)
        self.radii = np.array(
            [
                self.settings.detail_collision_radius
                if node.is_detail
                else self.settings.main_collision_radius
                for node in subgraph.nodes
            ],
            dtype=np.float64,
        )

        self._edges: tuple[GraphEdge, ...] = subgraph.edges
        self._edge_src = np.array(
            [self._index[e.source] for e in self._edges], dtype=np.intp
        )
        self._edge_tgt = np.array(
            [self._index[e.target] for e in self._edges], dtype=np.intp
        )
        self.links = LinkSet.build(
            pairs=list(zip(self._edge_src.tolist(), self._edge_tgt.tolist())),
            distances=[self._link_distance(e) for e in self._edges],
            strength=self.settings.link_strength,
            node_count=n,
        )

        self.alpha = ALPHA_START
        self.alpha_target = 0.0
        self.tick_count = 0
        self.stopped = False

        logger.debug(
            f"Simulation ready: {n} nodes, {len(self._edges)} edges "
            f"({self.links.size} springs), seeded={len(seed_positions or {})}"
        )

    # -- setup -----------------------------------------------------------

    def _link_distance(self, edge: GraphEdge) -> float:
        if edge.is_detail:
            return self.settings.detail_link_distance
        return self.settings.flow_link_distance

    def _initial_positions(
        self, seed_positions: Mapping[int, tuple[float, float]]
    ) -> np.ndarray:
        cx, cy = self.settings.center
        pos = np.zeros((len(self.node_ids), 2), dtype=np.float64)
        for i, node_id in enumerate(self.node_ids):
            if node_id in seed_positions:
                pos[i] = seed_positions[node_id]
                continue
            radius = INITIAL_RADIUS * math.sqrt(0.5 + i)
            angle = i * INITIAL_ANGLE
            pos[i] = (cx + radius * math.cos(angle), cy + radius * math.sin(angle))
        return pos

    # -- pinning ---------------------------------------------------------

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def __len__(self) -> int:
        return len(self.node_ids)

    def pin(self, node_id: int, x: float, y: float) -> None:
        """Hold ``node_id`` at (x, y) until unpinned."""
        i = self._index[node_id]
        self.fixed[i] = (x, y)
        self.pos[i] = (x, y)
        self.vel[i] = 0.0

    def unpin(self, node_id: int) -> None:
        self.fixed[self._index[node_id]] = np.nan

    def is_pinned(self, node_id: int) -> bool:
        return not np.isnan(self.fixed[self._index[node_id]]).any()

    @property
    def pinned_ids(self) -> tuple[int, ...]:
        mask = ~np.isnan(self.fixed[:, 0])
        return tuple(nid for nid, m in zip(self.node_ids, mask) if m)

    # -- temperature -----------------------------------------------------

    def restart(self, alpha: float | None = None) -> None:
        """Resume ticking, optionally resetting alpha (1.0 is full energy)."""
        if alpha is not None:
            self.alpha = alpha
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True

    def kinetic_energy(self) -> float:
        return float(0.5 * np.einsum("ij,ij->", self.vel, self.vel))

    # -- stepping --------------------------------------------------------

    def step(self, iterations: int = 1) -> PositionsSnapshot:
        """Advance the simulation and return the resulting positions.

        Args:
            iterations: Number of relaxation iterations to run

        Returns:
            Snapshot of node, edge and edge-label positions
        """
        s = self.settings
        for _ in range(max(iterations, 0)):
            self.alpha += (self.alpha_target - self.alpha) * s.alpha_decay

            apply_link_force(self.pos, self.vel, self.links, self.alpha, self._rng)
            apply_many_body_force(
                self.pos,
                self.vel,
                s.charge_strength,
                self.alpha,
                s.charge_distance_min,
                self._rng,
            )
            apply_center_force(self.pos, s.center)
            apply_collision_force(
                self.pos,
                self.vel,
                self.radii,
                s.collision_strength,
                s.collision_iterations,
                self._rng,
            )
            self._integrate()
            self.tick_count += 1

        return self.snapshot()

    def _integrate(self) -> None:
        free = np.isnan(self.fixed[:, 0])
        self.vel[free] *= 1.0 - self.settings.velocity_decay
        self.pos[free] += self.vel[free]

        pinned = ~free
        if pinned.any():
            self.pos[pinned] = self.fixed[pinned]
            self.vel[pinned] = 0.0

    # -- output ----------------------------------------------------------

    def positions(self) -> dict[int, tuple[float, float]]:
        return {
            nid: (float(self.pos[i, 0]), float(self.pos[i, 1]))
            for i, nid in enumerate(self.node_ids)
        }

    def snapshot(self) -> PositionsSnapshot:
        nodes = tuple(
            NodePosition(nid, float(self.pos[i, 0]), float(self.pos[i, 1]))
            for i, nid in enumerate(self.node_ids)
        )
        edges: list[EdgePosition] = []
        labels: list[EdgeLabelPosition] = []
        for edge, si, ti in zip(self._edges, self._edge_src, self._edge_tgt):
            (x1, y1), (x2, y2) = self.pos[si], self.pos[ti]
            edges.append(
                EdgePosition(edge.id, float(x1), float(y1), float(x2), float(y2))
            )
            label = edge.kind.label
            if label is not None:
                labels.append(
                    EdgeLabelPosition(
                        edge.id, float((x1 + x2) / 2), float((y1 + y2) / 2), label
                    )
                )
        return PositionsSnapshot(
            tick=self.tick_count,
            alpha=self.alpha,
            nodes=nodes,
            edges=tuple(edges),
            labels=tuple(labels),
        )
