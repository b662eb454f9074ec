"""
Infrastructure layer: the concrete array, flat kernels and native bindings.
"""
