"""
Studio resource curves.

Forecasts crew need per department from episode budgets and distribution
curves, and sets it against existing bookings month by month.
"""
