"""Browser session lifecycle: target filtering, launching, attaching."""
