"""State layer.

Holds the mutable session and leader-cache state, the normalized host
events that drive the controller, and the pure policy decisions applied
to them. Only the controller and the resolver mutate this state.
"""
