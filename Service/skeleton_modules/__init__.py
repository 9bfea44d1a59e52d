"""
Service/skeleton_modules/__init__.py

스켈레톤 그래프 생성 파이프라인 구성에 필요한 주요 모듈들을 외부로 노출합니다.
"""
from .geometry import Edge, EdgeType, Point, Vertex, VertexRegistry
from .ring_packer import PackedRings, RingDescriptor, RingPacker
from .classifier import ClassifiedEdges, EdgeClassifier
from .resource import KernelHandle
from .offset import OffsetExtractor
from .graph import SkeletonGraph
from .validator import ResultValidator

__all__ = [
    "ClassifiedEdges",
    "Edge",
    "EdgeClassifier",
    "EdgeType",
    "KernelHandle",
    "OffsetExtractor",
    "PackedRings",
    "Point",
    "ResultValidator",
    "RingDescriptor",
    "RingPacker",
    "SkeletonGraph",
    "Vertex",
    "VertexRegistry",
]
