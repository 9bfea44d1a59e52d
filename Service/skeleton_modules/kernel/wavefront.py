"""
Service/skeleton_modules/kernel/wavefront.py

경계선을 일정 속도로 안쪽으로 전파시키는 파면(wavefront) 시뮬레이션으로 직선 스켈레톤 호(arc)를 계산합니다.

입력 링은 내부가 진행 방향의 왼쪽에 오도록 정렬되어 있어야 합니다(외곽 링 반시계, 구멍 링 시계).
같은 시각/같은 위치에서 만나는 정점과 파면 선분은 하나의 충돌 클러스터로 묶어 처리하므로
edge/split 이벤트와 다중 정점이 동시에 만나는 vertex 이벤트를 같은 규칙으로 다룹니다.
"""
from __future__ import annotations

import heapq
import itertools
import math
from typing import Dict, List, Optional, Sequence, Set, Tuple

from Common.errors import KernelError

XY = Tuple[float, float]
Arc = Tuple[XY, XY]

ANGLE_EPS = 1e-9
PARALLEL_EPS = 1e-12
EVENT_BUDGET_FACTOR = 50


def _sub(a: XY, b: XY) -> XY:
    return a[0] - b[0], a[1] - b[1]


def _dot(a: XY, b: XY) -> float:
    return a[0] * b[0] + a[1] * b[1]


def _cross(a: XY, b: XY) -> float:
    return a[0] * b[1] - a[1] * b[0]


def _dist(a: XY, b: XY) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def _angle(v: XY) -> float:
    ang = math.atan2(v[1] + 0.0, v[0] + 0.0)
    if ang < 0.0:
        ang += 2.0 * math.pi
    if ang > 2.0 * math.pi - ANGLE_EPS:
        ang = 0.0
    return ang


def _segment_distance(p: XY, a: XY, b: XY) -> float:
    ab = _sub(b, a)
    length_sq = _dot(ab, ab)
    if length_sq == 0.0:
        return _dist(p, a)
    t = max(0.0, min(1.0, _dot(_sub(p, a), ab) / length_sq))
    return _dist(p, (a[0] + ab[0] * t, a[1] + ab[1] * t))


class _WaveEdge:
    """입력 엣지 하나의 지지선입니다. 시각 t 에서 normal·x - offset = t 를 만족하는 직선으로 이동합니다."""

    __slots__ = ("index", "direction", "normal", "offset")

    def __init__(self, index: int, start: XY, end: XY):
        dx, dy = _sub(end, start)
        length = math.hypot(dx, dy)
        if length == 0.0:
            raise KernelError(f"길이 0 입력 엣지: {start}")
        self.index = index
        self.direction = (dx / length, dy / length)
        self.normal = (-self.direction[1], self.direction[0])
        self.offset = _dot(self.normal, start)


class _WaveVertex:
    __slots__ = ("origin", "time", "velocity", "edge_in", "edge_out", "prev", "next", "active", "transient", "reflex")

    def __init__(self, origin: XY, time: float, edge_in: _WaveEdge, edge_out: _WaveEdge, transient: bool = False):
        self.origin = origin
        self.time = time
        self.edge_in = edge_in
        self.edge_out = edge_out
        self.prev: Optional[_WaveVertex] = None
        self.next: Optional[_WaveVertex] = None
        self.active = True
        self.transient = transient
        self.velocity: XY = (0.0, 0.0)
        self.reflex = False
        if not transient:
            velocity = _bisector_velocity(edge_in, edge_out)
            if velocity is None:
                raise KernelError(f"반대 방향으로 겹치는 엣지 사이의 정점: {origin}")
            self.velocity = velocity
            self.reflex = _cross(edge_in.direction, edge_out.direction) < -PARALLEL_EPS

    def position(self, t: float) -> XY:
        dt = t - self.time
        return self.origin[0] + self.velocity[0] * dt, self.origin[1] + self.velocity[1] * dt


def _bisector_velocity(edge_in: _WaveEdge, edge_out: _WaveEdge) -> Optional[XY]:
    # 두 지지선 모두에 대해 단위 속도로 멀어지는 속도 벡터
    na, nb = edge_in.normal, edge_out.normal
    denom = 1.0 + _dot(na, nb)
    if denom <= PARALLEL_EPS:
        return None
    return (na[0] + nb[0]) / denom, (na[1] + nb[1]) / denom


def _link(a: _WaveVertex, b: _WaveVertex) -> None:
    a.next = b
    b.prev = a


class _End:
    """클러스터에서 끊어진 파면 체인의 끝입니다. kind 0 은 클러스터에서 나가는 쪽, 1 은 들어오는 쪽입니다."""

    __slots__ = ("vertex", "edge", "kind", "angle")

    def __init__(self, vertex: _WaveVertex, edge: _WaveEdge, kind: int):
        self.vertex = vertex
        self.edge = edge
        self.kind = kind
        ray = edge.direction if kind == 0 else (-edge.direction[0], -edge.direction[1])
        self.angle = _angle(ray)


class StraightSkeletonSolver:
    """
    링 목록으로부터 직선 스켈레톤의 호 목록을 계산합니다.

    반환되는 호의 입력 정점 쪽 끝점은 입력 좌표와 비트 단위로 동일하며,
    입력 정점에서 시작하는 호는 항상 입력 정점을 시작점으로 가집니다.
    """

    def __init__(self, rings: Sequence[Sequence[XY]], tolerance: float = 1e-9):
        if not rings:
            raise KernelError("입력 링이 없습니다.")
        self._rings = [[(float(x), float(y)) for x, y in ring] for ring in rings]
        for ring in self._rings:
            if len(ring) < 3:
                raise KernelError(f"링은 최소 3개의 점이 필요합니다: {len(ring)}")

        xs = [p[0] for ring in self._rings for p in ring]
        ys = [p[1] for ring in self._rings for p in ring]
        scale = max(max(xs) - min(xs), max(ys) - min(ys))
        if not math.isfinite(scale) or scale <= 0.0:
            raise KernelError("입력 링의 범위가 유효하지 않습니다.")
        self._eps = tolerance * scale

        self._edges: List[_WaveEdge] = []
        self._vertices: List[_WaveVertex] = []
        self._arcs: List[Arc] = []
        self._queue: List[Tuple[float, int, XY]] = []
        self._serial = itertools.count()
        self._now = 0.0

    @property
    def tolerance(self) -> float:
        return self._eps

    def solve(self) -> List[Arc]:
        self._build_wavefront()
        for vertex in list(self._vertices):
            self._schedule_collapse(vertex, vertex.next)
            if vertex.reflex:
                self._schedule_splits(vertex)

        budget = EVENT_BUDGET_FACTOR * max(len(self._vertices), 4) ** 2
        processed = 0
        while self._queue:
            t, _, point = heapq.heappop(self._queue)
            processed += 1
            if processed > budget:
                raise KernelError(f"이벤트 처리 한도 초과: {budget}")
            self._now = max(self._now, t)
            self._process_cluster(self._now, point)

        return self._snap_arcs()

    def _build_wavefront(self) -> None:
        for ring in self._rings:
            count = len(ring)
            ring_edges = []
            for i in range(count):
                edge = _WaveEdge(len(self._edges), ring[i], ring[(i + 1) % count])
                self._edges.append(edge)
                ring_edges.append(edge)

            ring_vertices = [
                _WaveVertex(ring[i], 0.0, ring_edges[i - 1], ring_edges[i])
                for i in range(count)
            ]
            for i in range(count):
                _link(ring_vertices[i], ring_vertices[(i + 1) % count])
            self._vertices.extend(ring_vertices)

    def _push(self, t: float, point: XY) -> None:
        heapq.heappush(self._queue, (t, next(self._serial), point))

    def _schedule_collapse(self, u: _WaveVertex, v: _WaveVertex) -> None:
        """이웃한 두 정점이 만나는 시각(edge 이벤트)을 예약합니다."""
        if u is v or u.transient or v.transient:
            return
        pu, pv = u.position(self._now), v.position(self._now)
        gap = _sub(pv, pu)
        rel = _sub(v.velocity, u.velocity)
        rel_sq = _dot(rel, rel)
        if rel_sq <= PARALLEL_EPS:
            return
        s = -_dot(gap, rel) / rel_sq
        if s < -self._eps:
            return
        s = max(s, 0.0)
        miss = math.hypot(gap[0] + rel[0] * s, gap[1] + rel[1] * s)
        if miss > 10.0 * self._eps:
            return
        t = self._now + s
        a, b = u.position(t), v.position(t)
        self._push(t, ((a[0] + b[0]) / 2.0, (a[1] + b[1]) / 2.0))

    def _schedule_splits(self, vertex: _WaveVertex) -> None:
        """반사(reflex) 정점이 다른 엣지의 지지선과 만나는 후보 시각(split 이벤트)을 예약합니다."""
        for edge in self._edges:
            if edge is vertex.edge_in or edge is vertex.edge_out:
                continue
            ahead = _dot(edge.normal, vertex.origin) - edge.offset - vertex.time
            if ahead < -self._eps:
                continue
            closing = 1.0 - _dot(edge.normal, vertex.velocity)
            if closing <= PARALLEL_EPS:
                continue
            s = ahead / closing
            if s <= self._eps:
                continue
            t = vertex.time + s
            self._push(t, vertex.position(t))

    def _is_fresh(self, vertex: _WaveVertex, t: float, point: XY) -> bool:
        # 같은 클러스터에서 방금 만들어진 정점은 다시 충돌로 취급하지 않음
        return (
            not vertex.transient
            and abs(vertex.time - t) <= self._eps
            and _dist(vertex.origin, point) <= self._eps
        )

    def _process_cluster(self, t: float, point: XY) -> None:
        active = [v for v in self._vertices if v.active]
        members = [
            v for v in active
            if _dist(v.position(t), point) <= self._eps and not self._is_fresh(v, t, point)
        ]
        if not members:
            return

        member_ids: Set[int] = {id(v) for v in members}
        positions = [v.position(t) for v in members]
        center = (
            sum(p[0] for p in positions) / len(positions),
            sum(p[1] for p in positions) / len(positions),
        )

        crossings = []
        for x in active:
            y = x.next
            if id(x) in member_ids or id(y) in member_ids:
                continue
            a, b = x.position(t), y.position(t)
            if _dist(center, a) <= self._eps or _dist(center, b) <= self._eps:
                continue
            if _segment_distance(center, a, b) <= self._eps:
                crossings.append(x)

        if len(members) < 2 and not crossings:
            return

        ends: List[_End] = []
        for v in members:
            if id(v.prev) not in member_ids:
                ends.append(_End(v.prev, v.prev.edge_out, kind=1))
            if id(v.next) not in member_ids:
                ends.append(_End(v.next, v.next.edge_in, kind=0))
        for x in crossings:
            ends.append(_End(x, x.edge_out, kind=1))
            ends.append(_End(x.next, x.next.edge_in, kind=0))

        for v in members:
            self._emit(v.origin, center)
            v.active = False

        touched: List[_WaveVertex] = []
        for out_end, in_end in self._pair_ends(ends):
            touched.extend(self._join(t, center, out_end, in_end))

        for v in touched:
            self._close_small_cycle(t, v)

        for v in touched:
            if v.active and not v.transient:
                self._schedule_collapse(v.prev, v)
                self._schedule_collapse(v, v.next)
                if v.reflex:
                    self._schedule_splits(v)

    def _pair_ends(self, ends: List[_End]) -> List[Tuple[_End, _End]]:
        """
        클러스터 주변 반직선을 반시계 방향으로 정렬하여, 들어오는 체인 끝(kind 0)마다
        바로 다음에 오는 나가는 체인 끝(kind 1)을 짝지어 새 파면 정점을 만들 쌍을 결정합니다.
        """
        if not ends:
            return []
        ends.sort(key=lambda e: e.angle)
        group = ends[0].angle
        for end in ends:
            if end.angle - group <= ANGLE_EPS:
                end.angle = group
            else:
                group = end.angle
        ends.sort(key=lambda e: (e.angle, e.kind))

        pairs = []
        used: Set[int] = set()
        count = len(ends)
        for i, end in enumerate(ends):
            if end.kind != 0:
                continue
            for step in range(1, count):
                candidate = ends[(i + step) % count]
                if candidate.kind == 1 and id(candidate) not in used:
                    used.add(id(candidate))
                    pairs.append((candidate, end))
                    break
        if len(pairs) * 2 != count:
            raise KernelError(f"파면 체인 끝의 짝이 맞지 않습니다: ends={count}, pairs={len(pairs)}")
        return pairs

    def _join(self, t: float, center: XY, out_end: _End, in_end: _End) -> List[_WaveVertex]:
        p, n = out_end.vertex, in_end.vertex
        wedge = (out_end.angle - in_end.angle) % (2.0 * math.pi)

        if ANGLE_EPS < wedge < 2.0 * math.pi - ANGLE_EPS:
            vertex = _WaveVertex(center, t, out_end.edge, in_end.edge)
            self._vertices.append(vertex)
            _link(p, vertex)
            _link(vertex, n)
            return [vertex]

        # 폭이 0인 쐐기: 두 엣지가 겹쳐 붕괴하므로 가까운 쪽 끝까지 호를 잇고 그 지점에서 다시 처리
        pp, pn = p.position(t), n.position(t)
        dp, dn = _dist(center, pp), _dist(center, pn)
        if abs(dp - dn) <= self._eps:
            self._emit(center, pp)
            _link(p, n)
            self._push(t, pp)
            return [p, n]

        target = pp if dp < dn else pn
        self._emit(center, target)
        bridge = _WaveVertex(target, t, out_end.edge, in_end.edge, transient=True)
        self._vertices.append(bridge)
        _link(p, bridge)
        _link(bridge, n)
        self._push(t, target)
        return [bridge]

    def _close_small_cycle(self, t: float, vertex: _WaveVertex) -> None:
        """정점 1~2개로 줄어든 파면 고리는 면적이 0이므로 즉시 호로 마감합니다."""
        if not vertex.active:
            return
        if vertex.next is vertex:
            self._emit(vertex.origin, vertex.position(t))
            vertex.active = False
            return
        other = vertex.next
        if other.next is vertex and other.active:
            a, b = vertex.position(t), other.position(t)
            self._emit(vertex.origin, a)
            self._emit(other.origin, b)
            self._emit(a, b)
            vertex.active = False
            other.active = False

    def _emit(self, a: XY, b: XY) -> None:
        if _dist(a, b) > self._eps:
            self._arcs.append((a, b))

    def _snap_arcs(self) -> List[Arc]:
        """근접한 스켈레톤 노드를 하나로 병합하고 길이 0 호와 중복 호를 제거합니다."""
        snapper = _NodeSnapper(self._eps)
        for ring in self._rings:
            for p in ring:
                snapper.register(p)

        out: List[Arc] = []
        seen: Set[Tuple[XY, XY]] = set()
        for a, b in self._arcs:
            sa, sb = snapper.snap(a), snapper.snap(b)
            if sa == sb:
                continue
            key = (sa, sb) if sa <= sb else (sb, sa)
            if key in seen:
                continue
            seen.add(key)
            out.append((sa, sb))
        return out


class _NodeSnapper:
    def __init__(self, eps: float):
        self._eps = eps
        self._cell = eps if eps > 0.0 else 1e-12
        self._cells: Dict[Tuple[int, int], List[XY]] = {}

    def _key(self, p: XY) -> Tuple[int, int]:
        return math.floor(p[0] / self._cell), math.floor(p[1] / self._cell)

    def register(self, p: XY) -> XY:
        self._cells.setdefault(self._key(p), []).append(p)
        return p

    def snap(self, p: XY) -> XY:
        cx, cy = self._key(p)
        best: Optional[XY] = None
        best_dist = self._eps
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                for q in self._cells.get((cx + dx, cy + dy), ()):
                    d = _dist(p, q)
                    if d <= best_dist:
                        best, best_dist = q, d
        if best is not None:
            return best
        return self.register((p[0] + 0.0, p[1] + 0.0))
