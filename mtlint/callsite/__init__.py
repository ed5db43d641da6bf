"""mtlint.callsite: method shape table and call-site policy."""

from .policy import ArgumentDescriptor, CallBinding, CallSite, analyze_call, analyze_call_site, match_call
from .shapes import MethodShape, ParamRole, ShapeTable, default_shapes

__all__ = [
	"ArgumentDescriptor",
	"CallBinding",
	"CallSite",
	"MethodShape",
	"ParamRole",
	"ShapeTable",
	"analyze_call",
	"analyze_call_site",
	"default_shapes",
	"match_call",
]
