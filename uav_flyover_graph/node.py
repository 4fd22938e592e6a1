import math
from dataclasses import dataclass, field

from .geometry import TAU, Point


@dataclass
class Connection:
    """Directed edge to a vertex on another node."""

    neighbor: int  # arena index of the target vertex
    distance: float
    # starting and ending vertices must be above threshold to take the connection
    threshold: float = 0.0

    def __post_init__(self):
        if self.distance < 0:
            raise ValueError(f"distance must be non-negative, got {self.distance}")
        if self.threshold < 0:
            raise ValueError(f"threshold must be non-negative, got {self.threshold}")


@dataclass
class Vertex:
    index: int
    node: int  # index of the node this vertex sits on
    radius: float
    location: Point
    angle: float  # relative to the node center, sign marks the tangent side
    connection: Connection = None
    sentinel: bool = False
    prev: int = None
    next: int = None
    # Search bookkeeping, written only by the consumer of the graph
    g_cost: float = math.inf
    f_cost: float = math.inf
    parent: int = None

    @property
    def ring_key(self):
        return (self.angle % TAU, self.angle)


@dataclass
class Node:
    """Circular safety buffer around an obstacle or a flyzone corner."""

    index: int
    origin: Point
    radius: float
    height: float
    virtual: bool = False
    head: int = None  # vertex with the smallest ring key
    size: int = 0

    def to_point(self, angle):
        return Point(
            self.origin.x + self.radius * math.cos(angle),
            self.origin.y + self.radius * math.sin(angle),
            self.height,
        )


@dataclass
class VertexArena:
    """
    Owns every vertex of one build. Vertices refer to each other by index,
    and the next index handed out is always the current length, so indices
    are unique, start at 0 and follow insertion order.
    """

    vertices: list = field(default_factory=list)

    def __len__(self):
        return len(self.vertices)

    def __getitem__(self, index):
        return self.vertices[index]

    def __iter__(self):
        return iter(self.vertices)

    def new_vertex(self, node, angle, connection=None, sentinel=False):
        vertex = Vertex(
            index=len(self.vertices),
            node=node.index,
            radius=node.radius,
            location=node.to_point(angle),
            angle=angle,
            connection=connection,
            sentinel=sentinel,
        )
        self.vertices.append(vertex)
        return vertex

    def splice(self, node, index):
        """Insert a vertex into the node ring, keeping ring-key order."""
        v = self.vertices[index]
        if node.head is None:
            v.prev = v.next = index
            node.head = index
            node.size = 1
            return

        head = self.vertices[node.head]
        if v.ring_key < head.ring_key:
            after = head.prev
            node.head = index
        else:
            after = node.head
            cur = self.vertices[head.next]
            while cur.index != node.head and cur.ring_key <= v.ring_key:
                after = cur.index
                cur = self.vertices[cur.next]

        before = self.vertices[after].next
        v.prev, v.next = after, before
        self.vertices[after].next = index
        self.vertices[before].prev = index
        node.size += 1

    def ring(self, node):
        if node.head is None:
            return
        cur = self.vertices[node.head]
        while True:
            yield cur
            cur = self.vertices[cur.next]
            if cur.index == node.head:
                break
