"""Lunar phase, illumination and rise/set timing."""
