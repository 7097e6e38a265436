"""
Task subsystem.

Components:
- task_models.py: Task record + JSON record encode/decode
- task_store.py: JSON-file store (load/save/add/list/complete/delete)
"""
