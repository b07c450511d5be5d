"""
calrender.glyphs
----------------
Vector glyph assets for annotation symbols (emoji), color and monochrome.
"""
