"""
Application Layer for the FitCoach Progress API.

This package contains:
- exceptions.py: Error taxonomy shared by every layer
- ports/: Abstract repository interfaces (what the domain needs)
- use_cases/: Orchestration of domain operations against the ports
"""
