"""Clone invokers and the clone-or-skip orchestrator."""
