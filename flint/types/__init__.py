"""Runtime data model: type descriptors, values, bindings and scopes."""
