"""
calrender.holidays
------------------
Built-in holiday-data provider and the per-day annotation resolver.
"""
