from .strings import *
from .numbers import *
from .boolean import *
from .dates import *
from .values import *
from .types import *
from .containers import *
from .predicates import *
