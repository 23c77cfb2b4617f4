from emolink.routers import appointments, diary, goals, points, streaks

__all__ = ["appointments", "diary", "goals", "points", "streaks"]
