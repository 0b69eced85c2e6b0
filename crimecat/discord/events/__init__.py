"""
Event modules, one subpackage per category.

Each module declares `name` (the event name), `execute(ctx, *args)` and
optionally `once`. The first module bound under a name wins.
"""
