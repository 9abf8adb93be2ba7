"""
Task subsystem.

Components:
- task_models.py: API task snapshot (Task, SubTask) + status classification
- task_tracker.py: polling loop that waits for one task to finish
"""
