"""
노선 경로 복원 알고리즘
"""

from subway.algorithms.line_route import LineRoute, assemble_route

__all__ = [
    "LineRoute",
    "assemble_route",
]
