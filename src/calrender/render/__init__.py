"""
calrender.render
----------------
Serialization of a CalendarLayout to SVG markup and of SVG to PDF bytes.
"""
