"""Client core for the personal information admin.

Owns the record list, the search filter, the staged photo preview, the
dialog state machine and the mutation gateway. Nothing here depends on a
display server, so the package imports cleanly in headless test runs.
"""
