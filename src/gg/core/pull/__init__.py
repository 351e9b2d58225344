"""Remote-ref synchronization engine behind `gg pull`.

The engine runs in four steps, each in its own module:

- reverse_fetch / orphans: reconstruct what a remote last had and decide
  whether a vanished branch has any other remote serving it
- plan: resolve the requested refs into a FetchPlan before anything changes
- reconcile: after `git fetch`, create, fast-forward or retire local refs
- sync: read state, build the plan, fetch, reconcile
"""
