import logging
import math

import networkx as nx

from .config import PlannerConfig
from .flyzones import flyzone_sentinel_angles, virtualize_flyzone
from .geometry import TAU, Point, reverse_polarity
from .location import find_origin, project
from .node import Connection, Node, VertexArena
from .tangents import find_path
from .visibility import PathValidator, ProjectedObstacle

logger = logging.getLogger(__name__)


class Pathfinder:
    def __init__(self, flyzones, obstacles, config=None):
        """
        Tangent graph builder
        :param flyzones: boundary polygons, each a list of Location
        :param obstacles: list of Obstacle
        :param config: PlannerConfig (buffer, obstacle policy)
        """
        self.flyzones = [list(f) for f in flyzones]
        self.obstacles = list(obstacles)
        self.config = config or PlannerConfig()
        self.origin = None
        self.nodes = []
        self.arena = VertexArena()
        self.validator = None
        self._flyzone_points = []

    @property
    def buffer(self):
        return self.config.buffer

    def find_origin(self):
        self.origin = find_origin(self.flyzones)
        return self.origin

    def populate_nodes(self):
        self.nodes = []
        self.arena = VertexArena()
        self.find_origin()
        self._flyzone_points = [
            [project(location, self.origin) for location in flyzone] for flyzone in self.flyzones
        ]
        projected = [
            ProjectedObstacle(project(o.location, self.origin), o.radius, o.height)
            for o in self.obstacles
        ]
        self.validator = PathValidator(
            self._flyzone_points, projected, obstacle_policy=self.config.obstacle_policy
        )

        for obstacle, footprint in zip(self.obstacles, projected):
            node = Node(
                index=len(self.nodes),
                origin=Point(footprint.center.x, footprint.center.y, obstacle.height),
                radius=obstacle.radius + self.buffer,
                height=obstacle.height,
            )
            self.insert_flyzone_sentinel(node)
            self.nodes.append(node)
        if self.config.virtualize_flyzones:
            for i in range(len(self._flyzone_points)):
                self.virtualize_flyzone(i)
        logger.info("Populated %d nodes (%d obstacles)", len(self.nodes), len(self.obstacles))

    def insert_flyzone_sentinel(self, node):
        for angle in flyzone_sentinel_angles(node, self._flyzone_points):
            vertex = self.arena.new_vertex(node, angle, sentinel=True)
            self.arena.splice(node, vertex.index)

    def virtualize_flyzone(self, i):
        for corner in virtualize_flyzone(self._flyzone_points[i]):
            node = Node(
                index=len(self.nodes),
                origin=Point(corner.x, corner.y, 0.0),
                radius=self.buffer,
                height=0.0,
                virtual=True,
            )
            self.insert_flyzone_sentinel(node)
            self.nodes.append(node)

    def insert_edge(self, i, j, path):
        alpha, beta, distance, threshold = path
        logger.debug(
            "path: alpha %s beta %s distance %s", math.degrees(alpha), math.degrees(beta), distance
        )
        # Insert edge from u -> v
        v = self.arena.new_vertex(self.nodes[j], beta)
        edge = Connection(v.index, distance, threshold)
        u = self.arena.new_vertex(self.nodes[i], alpha, connection=edge)
        self.arena.splice(self.nodes[i], u.index)
        self.arena.splice(self.nodes[j], v.index)
        return u, v

    def insert_sentinel(self, i, angle):
        vertex = self.arena.new_vertex(self.nodes[i], angle, sentinel=True)
        self.arena.splice(self.nodes[i], vertex.index)
        return vertex

    def build_graph(self):
        """
        Rebuild the whole graph: nodes, ring vertices, tangent edges and
        obstacle sentinels. Nothing from a previous build is reused.
        """
        self.populate_nodes()
        n = len(self.nodes)
        logger.info("Building tangent graph with %d nodes...", n)
        for i in range(n):
            for j in range(i + 1, n):
                paths, sentinels = find_path(self.nodes[i], self.nodes[j], self.validator)
                logger.debug("[%d %d]: path count -> %d", i, j, len(paths))

                for alpha, beta, distance, threshold in paths:
                    # Edge from i to j
                    self.insert_edge(i, j, (alpha, beta, distance, threshold))
                    # Reciprocal edge from j to i
                    self.insert_edge(
                        j, i, (reverse_polarity(beta), reverse_polarity(alpha), distance, threshold)
                    )

                for alpha_s, beta_s in sentinels or []:
                    self.insert_sentinel(i, alpha_s)
                    self.insert_sentinel(j, beta_s)

        logger.info(
            "Graph built: %d vertices, %d edges", len(self.arena), self.edge_count()
        )
        return self.nodes

    def edge_count(self):
        return sum(1 for v in self.arena if v.connection is not None)

    def ring(self, node):
        return list(self.arena.ring(node))

    def to_networkx(self):
        """
        Export the graph for an external search: tangent edges keep their
        distance and threshold, ring neighbors are joined by arcs along the
        node circle.
        """
        G = nx.DiGraph()
        for v in self.arena:
            G.add_node(
                v.index,
                node=v.node,
                angle=v.angle,
                pos=v.location.to_xy(),
                sentinel=v.sentinel,
            )
        for v in self.arena:
            if v.connection is not None:
                G.add_edge(
                    v.index,
                    v.connection.neighbor,
                    weight=v.connection.distance,
                    threshold=v.connection.threshold,
                    kind="tangent",
                )
        for node in self.nodes:
            if node.size < 2:
                continue
            for v in self.arena.ring(node):
                nxt = self.arena[v.next]
                arc = node.radius * ((nxt.angle - v.angle) % TAU)
                _add_arc(G, v.index, nxt.index, arc)
                _add_arc(G, nxt.index, v.index, arc)
        return G

    def visualize(self, save_path=None):
        import matplotlib.pyplot as plt

        fig, ax = plt.subplots(figsize=(10, 10))
        for points in self._flyzone_points:
            x = [p.x for p in points] + [points[0].x]
            y = [p.y for p in points] + [points[0].y]
            ax.plot(x, y, 'k-', linewidth=2, label='Flyzone Boundary')

        for node in self.nodes:
            color = 'm' if node.virtual else 'r'
            ax.add_patch(plt.Circle(node.origin.to_xy(), node.radius, color=color, fill=False))
        if self.origin is not None:
            for o in self.obstacles:
                c = project(o.location, self.origin)
                ax.add_patch(plt.Circle(c.to_xy(), o.radius, color='r', alpha=0.4, label='Obstacle'))

        for v in self.arena:
            if v.connection is not None:
                w = self.arena[v.connection.neighbor]
                style = 'c-' if v.connection.threshold > 0 else 'b-'
                label = 'Flyover Tangent' if v.connection.threshold > 0 else 'Tangent'
                ax.plot(
                    [v.location.x, w.location.x], [v.location.y, w.location.y],
                    style, linewidth=0.5, label=label,
                )
            elif v.sentinel:
                ax.plot(v.location.x, v.location.y, 'gx', label='Sentinel')

        handles, labels = plt.gca().get_legend_handles_labels()
        by_label = dict(zip(labels, handles))
        plt.legend(by_label.values(), by_label.keys())

        plt.axis('equal')
        plt.grid(True)
        plt.title('Tangent Graph over Obstacle Buffers')

        if save_path:
            plt.savefig(save_path, dpi=300, bbox_inches='tight')
            logger.info("Figure saved to %s", save_path)
            plt.close(fig)
        else:
            plt.show()
        return fig


def _add_arc(G, u, w, length):
    if u == w:
        return
    if G.has_edge(u, w) and G[u][w]["weight"] <= length:
        return
    G.add_edge(u, w, weight=length, threshold=0.0, kind="arc")
