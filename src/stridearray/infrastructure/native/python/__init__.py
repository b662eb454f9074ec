"""
ctypes loader and bindings for the optional native dense-kernel library.
"""
