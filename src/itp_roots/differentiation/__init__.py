from .dual import is_dual, root_sensitivity, solve_dual

__all__ = ["is_dual", "root_sensitivity", "solve_dual"]
