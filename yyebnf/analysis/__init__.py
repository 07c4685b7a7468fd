"""비단말 의존 그래프 / SCC 위상 정렬 / 도달성 검사"""

from .deps import (
    Graph, reference_graph, dependency_graph, definition_graph,
    reaches, reaches_self, strongly_connected_components, is_recursive_group,
)
