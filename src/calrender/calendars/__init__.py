"""Calendar arithmetic: Gregorian rules and the approximate Hebrew converter."""
