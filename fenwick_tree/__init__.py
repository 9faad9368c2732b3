from loguru import logger

from fenwick_tree.bounds import Bounds
from fenwick_tree.bounds import Excluded
from fenwick_tree.bounds import Included
from fenwick_tree.bounds import MAX_INDEX
from fenwick_tree.bounds import UNBOUNDED
from fenwick_tree.bounds import Unbounded
from fenwick_tree.errors import AddError
from fenwick_tree.errors import FenwickTreeError
from fenwick_tree.errors import IndexOutOfRange
from fenwick_tree.errors import OutOfRange
from fenwick_tree.errors import SumError
from fenwick_tree.tree import FenwickTree

__version__ = "0.3.0"

# applications opt in with logger.enable("fenwick_tree")
logger.disable("fenwick_tree")
