# engine/__init__.py

# Core sizing and allocation entry points used by the UI layer
from .corpus_sizer import size_corpus
from .contribution_allocator import allocate_contributions

# Balance projection (verification and chart data)
from .balance_projector import project_balances, balances_frame

# Full recommendation pipeline
from .savings_planner import build_savings_plan
