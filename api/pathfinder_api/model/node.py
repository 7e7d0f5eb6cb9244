class Node:
    def __init__(self, node_id: str, label: str = "", x: float = 0.0, y: float = 0.0):
        self.node_id = node_id
        self.label = label or node_id
        self.x = x
        self.y = y

    def copy(self) -> "Node":
        return Node(self.node_id, self.label, self.x, self.y)

    def __repr__(self) -> str:
        return f"Node({self.node_id!r}, label={self.label!r}, x={self.x}, y={self.y})"

    def to_dict(self) -> dict:
        return {
            "id": self.node_id,
            "label": self.label,
            "x": self.x,
            "y": self.y,
        }
