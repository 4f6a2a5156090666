"""
The MODEL layer contains pure data structures.
It has NO knowledge of the Qt lifecycle or the Visualization (PyVista).
It deals with mesh buffers, surface parameters and I/O.
"""
