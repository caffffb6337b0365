"""Action handlers for the wellness planner.

Handlers are stateless coroutines over an injected repository container.
They contain the ownership rules and have no dependency on FastAPI.
"""
