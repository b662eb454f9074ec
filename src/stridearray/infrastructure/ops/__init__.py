"""
Flat-run kernels.

``flat_cpu`` holds the NumPy reference kernels; ``flat_cpu_ext`` routes
dense runs to the optional native library.
"""
