"""
Outbound HTTP services (community backend, bot-listing site).

No discord imports in this package; the ops API and deploy script use it too.
"""
