"""Domain layer for taskdn.

- entity: areas, projects, tasks, headings and the store contract
- ordering: display order per container, reconciliation, classifier
- shared: Result monad and domain events
"""
