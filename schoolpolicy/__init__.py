"""Role-and-ownership authorization policy for the school platform.

One rule table decides which actions an actor (through their active role) may
take on an entity. Chat menus, swipe panels, dashboards and the sidebar all read
their affordances from here instead of re-deriving role checks locally.
"""
