"""
Domain layer containing core business logic and domain services.

Submodules:
- auth: Principal resolution, admin gate and admin bootstrap.
- catalog: Sessions (publication and live-state rules) and taxonomy.
- favorites: Per-user favorites ledger.
- media: Upload validation and media cleanup.
- billing, history: Subscription placeholder and watch progress.
- utils: Domain-specific utilities (ID generation, slugs).
"""
