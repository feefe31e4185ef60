# =============================================================================
# stellify_tools/catalogue.py  -  The Tool Catalogue
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Declares every tool the server exposes.  A ToolSpec bundles:
#
#     name         unique tool identifier ("create_file")
#     description  what the LLM reads to decide WHEN to call the tool
#     arguments    the pydantic contract for the argument bag
#     call         the single client call the tool performs
#     summarize    the one-line human summary placed in a success envelope
#
#   A Catalogue is an immutable registry of specs.  It is built explicitly
#   with build_catalogue() and handed to the dispatcher and the MCP server.
#   Nothing looks it up through a module global, so tests can build as many
#   independent catalogues as they like.
#
# TOOL NAMING CONVENTIONS:
#   - create_* / add_* / install_* / run_*  → write operations, NOT idempotent.
#     Calling create_file twice creates two files.
#   - get_* / list_* / search_*             → read-only retrieval
#   - update_* / delete_* / remove_*        → mutate an existing entity
#   - analyze_*                             → server-side reports
# =============================================================================

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Iterable

from stellify_core import arguments as a
from stellify_core.client import StellifyClient
from stellify_core.models import ToolDescriptor


@dataclass(frozen=True)
class ToolSpec:
    """Everything the dispatcher needs to run one tool."""

    name: str
    description: str
    arguments: type[a.ToolArguments]
    call: Callable[[StellifyClient, Any], Awaitable[Any]]
    summarize: Callable[[Any, Any], str]

    def input_schema(self) -> dict[str, Any]:
        schema = self.arguments.model_json_schema()
        schema.pop("title", None)
        return schema

    def descriptor(self) -> ToolDescriptor:
        return ToolDescriptor(name=self.name, description=self.description, input_schema=self.input_schema())


class Catalogue:
    """Immutable, queryable set of ToolSpecs with unique names."""

    def __init__(self, specs: Iterable[ToolSpec]):
        by_name: dict[str, ToolSpec] = {}
        for spec in specs:
            if spec.name in by_name:
                raise ValueError(f"Tool '{spec.name}' is declared twice")
            by_name[spec.name] = spec

        self._specs = MappingProxyType(by_name)
        self._descriptors = tuple(spec.descriptor() for spec in by_name.values())

    def descriptors(self) -> tuple[ToolDescriptor, ...]:
        """The advertised catalogue, identical on every call."""
        return self._descriptors

    def get(self, name: str) -> ToolSpec | None:
        return self._specs.get(name)

    def names(self) -> tuple[str, ...]:
        return tuple(self._specs)

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __len__(self) -> int:
        return len(self._specs)


# =============================================================================
# Summary helpers
# =============================================================================
def _label(entity: dict[str, Any]) -> str:
    """'"Widget" (abc-123)' when the entity has a name, else just the uuid."""
    name = entity.get("name")
    return f'"{name}" ({entity["uuid"]})' if name else f"({entity['uuid']})"


def _count(collection: dict[str, Any], noun: str, plural: str | None = None) -> str:
    n = len(collection["items"])
    total = (collection.get("pagination") or {}).get("total")
    suffix = f" of {total}" if isinstance(total, int) and total != n else ""
    return f"Found {n}{suffix} {noun if n == 1 else (plural or noun + 's')}"


def _descendants(node: dict[str, Any]) -> int:
    children = node.get("children") or []
    return len(children) + sum(_descendants(child) for child in children)


def _deleted(result: dict[str, Any], what: str) -> str:
    count = result.get("deleted_count")
    if isinstance(count, int):
        return f"Deleted {what} ({count} element{'' if count == 1 else 's'} removed)"
    return f"Deleted {what}"


# =============================================================================
# Tool declarations
# =============================================================================
# Order here is the order callers see in "list tools": files → methods →
# statements → routes → elements → directories → globals → modules → the rest.
# =============================================================================
STELLIFY_TOOLS: tuple[ToolSpec, ...] = (
    # --- Files ---------------------------------------------------------------
    ToolSpec(
        name="create_file",
        description=(
            "Create a new file (class, model, controller, middleware) in a Stellify project. "
            "This creates the file structure but no methods yet."
        ),
        arguments=a.CreateFileArgs,
        call=lambda client, args: client.create_file(args.to_params()),
        summarize=lambda args, data: f'Created file "{args.name}" ({data["uuid"]})',
    ),
    ToolSpec(
        name="get_file",
        description="Fetch a file with its metadata, methods and statements by UUID.",
        arguments=a.FileRef,
        call=lambda client, args: client.get_file(args.file_uuid),
        summarize=lambda args, data: f"Retrieved file {_label(data)}",
    ),
    ToolSpec(
        name="search_files",
        description="Search for files in the project by name, optionally filtered by type, sorted and paginated.",
        arguments=a.SearchFilesArgs,
        call=lambda client, args: client.search_files(args.to_params()),
        summarize=lambda args, data: f'{_count(data, "file")} matching "{args.query}"',
    ),
    # --- Methods -------------------------------------------------------------
    ToolSpec(
        name="create_method",
        description=(
            "Create a method signature in a file. This only creates the method declaration, "
            "not the body. Use add_method_body to add the implementation."
        ),
        arguments=a.CreateMethodArgs,
        call=lambda client, args: client.create_method(args.to_params()),
        summarize=lambda args, data: f'Created method "{args.name}" ({data["uuid"]})',
    ),
    ToolSpec(
        name="add_method_body",
        description=(
            "Parse and add PHP code to a method body. Provide the implementation statements "
            "(without the function declaration). Stellify parses them into structured statements."
        ),
        arguments=a.AddMethodBodyArgs,
        call=lambda client, args: client.add_method_body(args.to_params()),
        summarize=lambda args, data: "Method body parsed and saved successfully",
    ),
    ToolSpec(
        name="get_method",
        description="Fetch a method with its signature and parsed body by UUID.",
        arguments=a.MethodRef,
        call=lambda client, args: client.get_method(args.method_uuid),
        summarize=lambda args, data: f"Retrieved method {_label(data)}",
    ),
    ToolSpec(
        name="search_methods",
        description="Search for methods in the project by name, or list the methods of one file.",
        arguments=a.SearchMethodsArgs,
        call=lambda client, args: client.search_methods(args.to_params()),
        summarize=lambda args, data: _count(data, "method"),
    ),
    # --- Statements ----------------------------------------------------------
    ToolSpec(
        name="create_statement",
        description=(
            "Create an empty statement inside a method. Fill it with add_statement_code. "
            "Use this to build a method body one statement at a time."
        ),
        arguments=a.CreateStatementArgs,
        call=lambda client, args: client.create_statement(args.to_params()),
        summarize=lambda args, data: f"Created statement ({data['uuid']}) in method {args.method_uuid}",
    ),
    ToolSpec(
        name="add_statement_code",
        description="Parse a single PHP statement and store it in an existing statement.",
        arguments=a.AddStatementCodeArgs,
        call=lambda client, args: client.add_statement_code(args.to_params()),
        summarize=lambda args, data: "Statement code parsed and saved successfully",
    ),
    ToolSpec(
        name="get_statement",
        description="Fetch a statement and its parsed clauses by UUID.",
        arguments=a.StatementRef,
        call=lambda client, args: client.get_statement(args.statement_uuid),
        summarize=lambda args, data: f"Retrieved statement {_label(data)}",
    ),
    # --- Routes --------------------------------------------------------------
    ToolSpec(
        name="create_route",
        description=(
            "Create a route (page or API endpoint) in a Stellify project. "
            "The returned UUID is the page to attach elements to."
        ),
        arguments=a.CreateRouteArgs,
        call=lambda client, args: client.create_route(args.to_params()),
        summarize=lambda args, data: f'Created route "{args.name}" at {args.path} ({data["uuid"]})',
    ),
    ToolSpec(
        name="get_route",
        description="Fetch a route by UUID.",
        arguments=a.RouteRef,
        call=lambda client, args: client.get_route(args.route_uuid),
        summarize=lambda args, data: f"Retrieved route {_label(data)}",
    ),
    # --- Elements ------------------------------------------------------------
    ToolSpec(
        name="create_element",
        description=(
            "Create a UI element. Pass `page` (a route UUID) for a root element, or `parent` "
            "(an element UUID) for a nested one. Configure its attributes with update_element."
        ),
        arguments=a.CreateElementArgs,
        call=lambda client, args: client.create_element(args.to_params()),
        summarize=lambda args, data: f"Created {args.type} element ({data['uuid']})",
    ),
    ToolSpec(
        name="update_element",
        description=(
            "Set HTML attributes on an element: tag, classes, text, type, placeholder, "
            "action, method and so on. Only the keys given in `data` change."
        ),
        arguments=a.UpdateElementArgs,
        call=lambda client, args: client.update_element(args.element_uuid, args.to_params()),
        summarize=lambda args, data: f"Updated element {_label(data)}",
    ),
    ToolSpec(
        name="get_element",
        description="Fetch a single element and its attributes by UUID.",
        arguments=a.ElementRef,
        call=lambda client, args: client.get_element(args.element_uuid),
        summarize=lambda args, data: f"Retrieved element {_label(data)}",
    ),
    ToolSpec(
        name="get_element_tree",
        description="Fetch an element together with all of its nested children.",
        arguments=a.ElementRef,
        call=lambda client, args: client.get_element_tree(args.element_uuid),
        summarize=lambda args, data: (
            f"Retrieved element tree {_label(data)} with {_descendants(data)} descendant(s)"
        ),
    ),
    ToolSpec(
        name="delete_element",
        description="Delete an element. Its children are deleted with it.",
        arguments=a.ElementRef,
        call=lambda client, args: client.delete_element(args.element_uuid),
        summarize=lambda args, data: _deleted(data, f"element {args.element_uuid}"),
    ),
    ToolSpec(
        name="search_elements",
        description="Search elements in the project by name or type.",
        arguments=a.SearchElementsArgs,
        call=lambda client, args: client.search_elements(args.to_params()),
        summarize=lambda args, data: _count(data, "element"),
    ),
    ToolSpec(
        name="html_to_elements",
        description=(
            "Convert an HTML snippet into Stellify elements in one call, preserving nesting "
            "and attributes. Set `test` to true to preview the result without saving."
        ),
        arguments=a.HtmlToElementsArgs,
        call=lambda client, args: client.html_to_elements(args.to_params()),
        summarize=lambda args, data: (
            f"Previewed {len(data)} element(s); nothing was saved"
            if args.test
            else f"Created {len(data)} element(s) from HTML"
        ),
    ),
    # --- Directories ---------------------------------------------------------
    ToolSpec(
        name="create_directory",
        description="Create a directory in a Stellify project, optionally nested under another directory.",
        arguments=a.CreateDirectoryArgs,
        call=lambda client, args: client.create_directory(args.to_params()),
        summarize=lambda args, data: f'Created directory "{args.name}" ({data["uuid"]})',
    ),
    ToolSpec(
        name="get_directory",
        description="Fetch a directory and the files it contains by UUID.",
        arguments=a.DirectoryRef,
        call=lambda client, args: client.get_directory(args.directory_uuid),
        summarize=lambda args, data: f"Retrieved directory {_label(data)}",
    ),
    # --- Globals -------------------------------------------------------------
    ToolSpec(
        name="list_globals",
        description="List the shared global files available to every project.",
        arguments=a.NoArgs,
        call=lambda client, args: client.list_globals(),
        summarize=lambda args, data: _count(data, "global file"),
    ),
    ToolSpec(
        name="get_global",
        description="Fetch a global file with its methods by UUID.",
        arguments=a.FileRef,
        call=lambda client, args: client.get_global(args.file_uuid),
        summarize=lambda args, data: f"Retrieved global file {_label(data)}",
    ),
    ToolSpec(
        name="install_global",
        description="Copy a global file into a directory of the current project.",
        arguments=a.InstallGlobalArgs,
        call=lambda client, args: client.install_global(args.to_params()),
        summarize=lambda args, data: f"Installed global file {args.file_uuid} into directory {args.directory_uuid}",
    ),
    ToolSpec(
        name="search_global_methods",
        description="Search the global library for reusable methods before writing new ones.",
        arguments=a.SearchGlobalMethodsArgs,
        call=lambda client, args: client.search_global_methods(args.to_params()),
        summarize=lambda args, data: f'{_count(data, "global method")} matching "{args.query}"',
    ),
    # --- Modules -------------------------------------------------------------
    ToolSpec(
        name="list_modules",
        description="List modules: named, versioned groups of global files.",
        arguments=a.NoArgs,
        call=lambda client, args: client.list_modules(),
        summarize=lambda args, data: _count(data, "module"),
    ),
    ToolSpec(
        name="get_module",
        description="Fetch a module and its files by UUID.",
        arguments=a.ModuleRef,
        call=lambda client, args: client.get_module(args.module_uuid),
        summarize=lambda args, data: f"Retrieved module {_label(data)}",
    ),
    ToolSpec(
        name="create_module",
        description="Create a new module to group related global files.",
        arguments=a.CreateModuleArgs,
        call=lambda client, args: client.create_module(args.to_params()),
        summarize=lambda args, data: f'Created module "{args.name}" ({data["uuid"]})',
    ),
    ToolSpec(
        name="add_file_to_module",
        description="Add a global file to a module, optionally at a given position.",
        arguments=a.AddFileToModuleArgs,
        call=lambda client, args: client.add_file_to_module(args.to_params()),
        summarize=lambda args, data: f"Added file {args.file_uuid} to module {args.module_uuid}",
    ),
    ToolSpec(
        name="remove_file_from_module",
        description="Remove a file from a module. The global file itself is kept.",
        arguments=a.ModuleFileArgs,
        call=lambda client, args: client.remove_file_from_module(args.module_uuid, args.file_uuid),
        summarize=lambda args, data: f"Removed file {args.file_uuid} from module {args.module_uuid}",
    ),
    ToolSpec(
        name="install_module",
        description="Install every file of a module into a directory of the current project.",
        arguments=a.InstallModuleArgs,
        call=lambda client, args: client.install_module(args.to_params()),
        summarize=lambda args, data: f"Installed module {args.module_uuid} into directory {args.directory_uuid}",
    ),
    ToolSpec(
        name="delete_module",
        description="Delete a module. Its global files are kept.",
        arguments=a.ModuleRef,
        call=lambda client, args: client.delete_module(args.module_uuid),
        summarize=lambda args, data: f"Deleted module {args.module_uuid}",
    ),
    # --- Scaffolding ---------------------------------------------------------
    ToolSpec(
        name="create_resources",
        description=(
            "Scaffold a complete resource in one call: model, migration, resource controller "
            "and optional service class, with the given fields."
        ),
        arguments=a.CreateResourcesArgs,
        call=lambda client, args: client.create_resources(args.to_params()),
        summarize=lambda args, data: f'Scaffolded resources for "{args.name}"',
    ),
    # --- Execution -----------------------------------------------------------
    ToolSpec(
        name="run_code",
        description=(
            "Execute a method on Stellify's sandbox and return its output. "
            "`timeout` (seconds) is enforced by Stellify."
        ),
        arguments=a.RunCodeArgs,
        call=lambda client, args: client.run_code(args.to_params()),
        summarize=lambda args, data: f"Executed method {args.method_uuid}",
    ),
    # --- Capability registry -------------------------------------------------
    ToolSpec(
        name="list_capabilities",
        description="List the framework capabilities (packages, helpers) Stellify can provide.",
        arguments=a.ListCapabilitiesArgs,
        call=lambda client, args: client.list_capabilities(args.to_params()),
        summarize=lambda args, data: _count(data, "capability", "capabilities"),
    ),
    ToolSpec(
        name="request_capability",
        description=(
            "Record a request for a capability Stellify does not offer yet. "
            "Use this instead of working around a missing feature."
        ),
        arguments=a.RequestCapabilityArgs,
        call=lambda client, args: client.request_capability(args.to_params()),
        summarize=lambda args, data: f'Requested capability "{args.name}" ({data["uuid"]})',
    ),
    # --- Analysis ------------------------------------------------------------
    ToolSpec(
        name="analyze_performance",
        description="Run Stellify's performance analysis on a file (or one method) and return the findings.",
        arguments=a.AnalyzePerformanceArgs,
        call=lambda client, args: client.analyze_performance(args.to_params()),
        summarize=lambda args, data: f"Performance analysis complete for file {args.file_uuid}",
    ),
    ToolSpec(
        name="analyze_quality",
        description="Run Stellify's code-quality analysis on a file and return the findings.",
        arguments=a.AnalyzeQualityArgs,
        call=lambda client, args: client.analyze_quality(args.to_params()),
        summarize=lambda args, data: f"Quality analysis complete for file {args.file_uuid}",
    ),
)


def build_catalogue(specs: Iterable[ToolSpec] = STELLIFY_TOOLS) -> Catalogue:
    """Construct a fresh Catalogue (defaults to every Stellify tool)."""
    return Catalogue(specs)
