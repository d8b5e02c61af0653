"""Physics core: bodies, gravity, integration, trails."""
