"""Feature modules. Each package exposes one blueprint registered by core.module_registry."""
