"""Feature modules. Each one exposes a blueprint registered by ``core.module_registry``."""
