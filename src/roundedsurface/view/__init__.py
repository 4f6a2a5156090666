"""
The VIEW layer turns surface meshes into PyVista objects and preview windows.
"""
