"""Self-referential HTTP load generator built on recursive Fibonacci fan-out."""
