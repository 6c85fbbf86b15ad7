from petriforge.utils import *
from petriforge.vector import *
from petriforge.petri_net import *
from petriforge.scc import *
from petriforge.circuits import *
from petriforge.handles import *
from petriforge.connectivity import *
from petriforge.layout import *
from petriforge.analysis import *
from petriforge.exceptions import PetriNetError, MalformedStructureError, DisconnectionError
from petriforge import exceptions

try:
    from petriforge._version import __version__
except ImportError:
    __version__ = 'unknown'
