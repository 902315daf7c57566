"""
AttendeeAssigner — timeslot assignment constraint model.
Uses OR-Tools CP-SAT (or Z3) to assign attendees to timeslots while enforcing
exact visit counts and timeslot capacities.

The JSON input document is the source of truth for attendees and timeslots.
"""

__version__ = "1.0.0"
