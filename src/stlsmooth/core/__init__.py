from stlsmooth.core.stl import decompose, inner_cycle, stl_array

__all__ = ["decompose", "inner_cycle", "stl_array"]
