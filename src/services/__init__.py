"""
Application services layer (use cases).

Services orchestrate the domain logic to fulfill application use cases.
They depend on ports (interfaces) from core/, never on concrete
implementations from adapters/.

This layer contains:
- sync: catalog synchronization coordinator
- reconciler: movie/character association matching (pure)
- admission: upstream movie filtering policy
- run_guard: single-flight run flag
"""
