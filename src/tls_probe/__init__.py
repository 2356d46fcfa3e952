from .names_and_numbers import *
from .protocol import *
from .sslv2 import *
from .scan import *
from .checks import *
from .report import *
from . import names_and_numbers, protocol, sslv2, scan, checks, report
