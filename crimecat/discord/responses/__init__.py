"""
Response handlers, one subpackage per kind (autocomplete, buttons, selects, modals).

Each module declares `name` and `execute(ctx, interaction, ...)`. Component
handlers are looked up by the handler part of the custom_id; autocomplete
handlers by the focused option name.
"""
