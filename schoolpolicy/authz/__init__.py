"""Authorization / policy layer.

- `rules`: the static rule table, one family per entity kind
- `evaluator`: pure decision function over (context, active role)
- `policy`: env-driven knobs (audit logging, global action denylist)
"""
