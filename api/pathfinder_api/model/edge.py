class Edge:
    def __init__(self, source: str, target: str,
                edge_id: str = None,
                weight: float = 1.0):
        self.edge_id = edge_id
        self.source = source
        self.target = target
        self.weight = weight

    def copy(self) -> "Edge":
        return Edge(self.source, self.target, edge_id=self.edge_id, weight=self.weight)

    def __repr__(self) -> str:
        return f"Edge({self.source!r} -> {self.target!r}, id={self.edge_id!r}, weight={self.weight})"

    def to_dict(self) -> dict:
        return {
            "id": self.edge_id,
            "from": self.source,
            "to": self.target,
            "weight": self.weight,
        }
