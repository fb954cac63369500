"""Infrastructure layer — graph engine, snapshots, workspace.

This layer depends on stdlib, the domain layer and third-party libs
(NetworkX, pydantic). It must never import from services, commands,
or output.
"""
