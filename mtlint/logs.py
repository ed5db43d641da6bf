# Log message templates (used with loguru's logger).

# Configuration
CONFIG_LOADED = "Loaded configuration from {path}"
CONFIG_DEFAULTS = "No configuration file found, using built-in method shapes"
CONFIG_METHODS_ADDED = "Configuration adds {count} method shape(s)"

# Declaration discovery
DECL_TEMPLATE_METHOD = "Found template method {name}({roles}) at line {line}"
DECL_TEMPLATE_PARAM_MISSING = "Template parameter '{param}' not found in {name} at line {line}; skipping"
DECL_EXTENSION_CLASS = "Found extension class {name}"
DECL_INVALID_OVERLOAD = "Ignoring {name} at line {line}: {error}"
DECL_CONSTANT = "Found string constant {name} at line {line}"
DECL_BAD_CONSTANT = "Ignoring constant {name} at line {line}: {error}"

# Scanning
SCAN_FILE = "Scanning {path}"
SCAN_CALL_SITE = "  Call site {method} at {line}:{column} with {count} argument(s)"
SCAN_UNBALANCED_CALL = "Unbalanced argument list for {method} at {line}:{column}; skipping"
SCAN_OPAQUE_ARGUMENT = "  Treating argument {text!r} as an opaque expression"
SCAN_BAD_LITERAL = "Skipping call site at {line}:{column}: {error}"

# Results
FILE_DIAGNOSTICS = "{path}: {count} diagnostic(s)"
FILE_FIXED = "Applied {count} fix(es) to {path}"
NO_SOURCE_FILES = "No .cs files found under the given paths"
