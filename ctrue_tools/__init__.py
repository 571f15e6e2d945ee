"""CTRUE trigger-class analysis tools."""
