from .admin import Admin
from .evaluator import Evaluator
from .candidate import Candidate
from .category import EvaluationCategory
from .item import EvaluationItem
from .score import Score
from .progress import EvaluationProgress
from .setting import Setting
# base and mixins are imported by the above as needed
