"""
Error types raised by the graph model, the exporter and the MST engine
"""


class GraphError(Exception):
    """Base class for every graph error"""


class InvalidArgumentError(GraphError, ValueError):
    """Absent, destroyed or wrongly typed graph / vertex argument"""


class DuplicateVertexError(GraphError):
    def __init__(self, vertex_id):
        super().__init__(f"vertex {vertex_id} already exists")
        self.vertex_id = vertex_id


class UnresolvedTargetError(GraphError, LookupError):
    def __init__(self, source_id, target_id):
        super().__init__(f"edge {source_id} -> {target_id}: target vertex not found")
        self.source_id = source_id
        self.target_id = target_id


class ResourceUnavailableError(GraphError, OSError):
    def __init__(self, path, reason=None):
        message = f"cannot open {path} for writing"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.path = path


class AllocationFailureError(GraphError, MemoryError):
    """Storage for a new graph element could not be obtained"""
