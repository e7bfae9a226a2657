"""
Amendment Engine - Democratic Constitutional Amendment Workflows

Proposals move through drafting, community review, weighted voting and
finalization. Review length, voting length, quorum and approval threshold
all scale with the impact severity of the proposal.

Lifecycle:
- draft -> under-review -> voting -> approved -> implemented
- draft -> under-review -> voting -> rejected
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
