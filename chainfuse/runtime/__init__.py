"""Chain wrapper, its method table and flow composition."""

from chainfuse.runtime.method_table import DEFAULT_METHODS, MethodSpec, MethodTable
from chainfuse.runtime.wrapper import ChainWrapper, chain, configure, register_method, wrap
from chainfuse.runtime.flow import LARGE_ARRAY_SIZE, LaziableFunc, flow, flow_right, laziable
