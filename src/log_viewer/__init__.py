"""Workout log viewer — loads pages from the coaching backend and reports them."""

from log_viewer.loader import LoadTicket, ViewSession, WorkoutLogLoader

__all__ = ["LoadTicket", "ViewSession", "WorkoutLogLoader"]
