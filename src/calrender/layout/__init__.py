"""
calrender.layout
----------------
Themes, cell geometry and the per-style layout builders.
"""
