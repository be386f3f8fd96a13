"""Force terms for the layout simulation.

Each function updates the velocity (or, for centering, the position) arrays
of a simulation in place. State is struct-of-arrays: ``pos`` and ``vel`` are
``(n, 2)`` float arrays indexed by the simulation's stable node index, and
links are parallel integer/float arrays, so no force ever holds a reference
to a node object.

The force model follows d3-force semantics:
    - link:      spring toward a target distance, split by degree bias
    - many-body: pairwise inverse-square repulsion, scaled by alpha
    - center:    translates the whole system onto the canvas centre
    - collide:   pushes apart overlapping circles, independent of alpha

Pairwise terms are exact O(n²); CFGs handed to the viewer have at most a
few hundred visible nodes.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

FloatArray = NDArray[np.float64]
IntArray = NDArray[np.intp]

JIGGLE_SCALE = 1e-6


def jiggle(rng: np.random.Generator, shape: tuple[int, ...]) -> FloatArray:
    """Tiny random offsets used to separate exactly coincident points."""
    return (rng.random(shape) - 0.5) * JIGGLE_SCALE


@dataclass(frozen=True)
class LinkSet:
    """Springs of the visible edges, as parallel arrays."""

    source: IntArray
    target: IntArray
    distance: FloatArray
    strength: FloatArray
    bias: FloatArray

    @property
    def size(self) -> int:
        return int(self.source.shape[0])

    @classmethod
    def build(
        cls,
        pairs: list[tuple[int, int]],
        distances: list[float],
        strength: float,
        node_count: int,
    ) -> LinkSet:
        """Build a link set from index pairs.

        Self-loops are dropped: their spring pulls a node toward itself and
        cancels out.

        Args:
            pairs: (source index, target index) per edge
            distances: Target separation per edge
            strength: Spring strength shared by all links
            node_count: Number of simulated nodes
        """
        kept = [(p, d) for p, d in zip(pairs, distances, strict=True) if p[0] != p[1]]
        if not kept:
            empty_i = np.zeros(0, dtype=np.intp)
            empty_f = np.zeros(0, dtype=np.float64)
            return cls(empty_i, empty_i, empty_f, empty_f, empty_f)

        source = np.array([p[0] for p, _ in kept], dtype=np.intp)
        target = np.array([p[1] for p, _ in kept], dtype=np.intp)

        count = np.bincount(np.concatenate([source, target]), minlength=node_count)
        bias = count[source] / (count[source] + count[target])

        return cls(
            source=source,
            target=target,
            distance=np.array([d for _, d in kept], dtype=np.float64),
            strength=np.full(len(kept), strength, dtype=np.float64),
            bias=bias.astype(np.float64),
        )


def apply_link_force(
    pos: FloatArray,
    vel: FloatArray,
    links: LinkSet,
    alpha: float,
    rng: np.random.Generator,
) -> None:
    """Pull (or push) every linked pair toward its target distance."""
    if links.size == 0:
        return

    delta = (pos[links.target] + vel[links.target]) - (
        pos[links.source] + vel[links.source]
    )
    zero = delta == 0
    if zero.any():
        delta[zero] = jiggle(rng, (int(zero.sum()),))

    length = np.linalg.norm(delta, axis=1)
    scale = (length - links.distance) / length * alpha * links.strength
    delta *= scale[:, None]

    np.add.at(vel, links.target, -delta * links.bias[:, None])
    np.add.at(vel, links.source, delta * (1.0 - links.bias)[:, None])


def apply_many_body_force(
    pos: FloatArray,
    vel: FloatArray,
    strength: float,
    alpha: float,
    distance_min: float,
    rng: np.random.Generator,
) -> None:
    """Apply pairwise repulsion (negative strength) between all nodes."""
    n = pos.shape[0]
    if n < 2:
        return

    # diff[i, j] points from node i to node j
    diff = pos[None, :, :] - pos[:, None, :]
    off_diagonal = ~np.eye(n, dtype=bool)
    coincident = (diff == 0).all(axis=2) & off_diagonal
    if coincident.any():
        diff[coincident] = jiggle(rng, (int(coincident.sum()), 2))

    l2 = np.einsum("ijk,ijk->ij", diff, diff)
    min2 = distance_min * distance_min
    l2 = np.where(l2 < min2, np.sqrt(min2 * l2), l2)
    l2[~off_diagonal] = np.inf

    weight = strength * alpha / l2
    vel += np.einsum("ijk,ij->ik", diff, weight)


def apply_center_force(
    pos: FloatArray, center: tuple[float, float], strength: float = 1.0
) -> None:
    """Translate all nodes so their centroid moves onto ``center``."""
    if pos.shape[0] == 0:
        return
    shift = (pos.mean(axis=0) - np.asarray(center, dtype=np.float64)) * strength
    pos -= shift


def apply_collision_force(
    pos: FloatArray,
    vel: FloatArray,
    radii: FloatArray,
    strength: float,
    iterations: int,
    rng: np.random.Generator,
) -> None:
    """Push apart nodes whose predicted collision circles overlap.

    Each pass looks at positions one step ahead (``pos + vel``) and splits
    the correction between the two nodes by squared radius, so the smaller
    node moves more.
    """
    n = pos.shape[0]
    if n < 2:
        return

    upper = np.triu(np.ones((n, n), dtype=bool), k=1)
    reach = radii[:, None] + radii[None, :]
    r2 = radii * radii

    for _ in range(iterations):
        predicted = pos + vel
        diff = predicted[:, None, :] - predicted[None, :, :]
        l2 = np.einsum("ijk,ijk->ij", diff, diff)
        overlapping = upper & (l2 < reach * reach)
        if not overlapping.any():
            break

        i_idx, j_idx = np.nonzero(overlapping)
        d = diff[i_idx, j_idx]
        zero = (d == 0).all(axis=1)
        if zero.any():
            d[zero] = jiggle(rng, (int(zero.sum()), 2))

        length = np.linalg.norm(d, axis=1)
        d *= ((reach[i_idx, j_idx] - length) / length * strength)[:, None]

        share = r2[j_idx] / (r2[i_idx] + r2[j_idx])
        np.add.at(vel, i_idx, d * share[:, None])
        np.add.at(vel, j_idx, -d * (1.0 - share)[:, None])
