# =============================================================================
# stellify_core/arguments.py  -  Argument Contracts (one model per tool)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Every tool gets an explicit pydantic model describing the argument bag it
#   accepts.  The dispatcher validates the raw bag against the model BEFORE
#   any HTTP call, so a wrong type or a missing field is reported locally
#   instead of surfacing as an opaque 422 from the API.
#
#   The same models produce the JSON schemas advertised in "list tools"
#   (model_json_schema), so the advertised contract and the enforced
#   contract cannot drift apart.
#
# NAMING CONVENTION:
#   Callers always pass identifiers as <kind>_uuid (file_uuid, method_uuid,
#   element_uuid...).  Where the Stellify API expects a different field name
#   in the request body, the field carries a serialization_alias and
#   to_params() emits the remote name:
#
#       CreateMethodArgs(file_uuid="f-1", return_type="int").to_params()
#       → {"file": "f-1", "returnType": "int", ...}
#
# PATH PARAMETERS:
#   Fields that end up in the URL (GET /file/{uuid}) are read off the model
#   by the catalogue and passed to the client separately.
# =============================================================================

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ToolArguments(BaseModel):
    """Base for every argument contract."""

    model_config = ConfigDict(extra="forbid")

    def to_params(self) -> dict[str, Any]:
        """Request body / query params in the remote API's field names."""
        return self.model_dump(by_alias=True, exclude_none=True)


class NoArgs(ToolArguments):
    """For listing tools that take nothing."""


class TypedName(BaseModel):
    """A {name, type} pair: method parameters, scaffold fields."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(description='Name (without "$" for PHP parameters)')
    type: str = Field(description='Type (e.g. "int", "string", "Request")')


# =============================================================================
# Files
# =============================================================================
FileType = Literal["class", "model", "controller", "middleware"]


class CreateFileArgs(ToolArguments):
    project_id: str = Field(description="The UUID of the Stellify project")
    name: str = Field(description='File name (e.g. "Calculator", "UserController")')
    type: FileType = Field(description="Type of file to create")
    namespace: str | None = Field(
        default=None,
        description='PHP namespace (e.g. "App\\Services\\", "App\\Http\\Controllers\\")',
    )
    directory_uuid: str | None = Field(
        default=None,
        serialization_alias="directory",
        description="UUID of the target directory. Omit to let Stellify pick one from the file type",
    )


class FileRef(ToolArguments):
    file_uuid: str = Field(description="UUID of the file")


class SearchFilesArgs(ToolArguments):
    query: str = Field(description="Search term matched against file names")
    type: str | None = Field(default=None, description="Filter by file type (class, model, controller, middleware)")
    include_metadata: bool | None = Field(default=None, description="Include ratings, tags and author metadata")
    per_page: int | None = Field(default=None, ge=1, le=100, description="Results per page")
    sort: Literal["created_at", "name", "type", "ai_rating", "usage_rating", "system_rating", "user_name"] | None = None
    direction: Literal["asc", "desc"] | None = None


# =============================================================================
# Methods
# =============================================================================
class CreateMethodArgs(ToolArguments):
    file_uuid: str = Field(serialization_alias="file", description="UUID of the file to add the method to")
    name: str = Field(description='Method name (e.g. "add", "store", "index")')
    visibility: Literal["public", "protected", "private"] = Field(default="public", description="Method visibility")
    is_static: bool = Field(default=False, description="Whether the method is static")
    return_type: str | None = Field(
        default=None,
        serialization_alias="returnType",
        description='Return type (e.g. "int", "string", "JsonResponse", "void")',
    )
    parameters: list[TypedName] | None = Field(default=None, description="Method parameters")


class AddMethodBodyArgs(ToolArguments):
    file_uuid: str = Field(description="UUID of the file containing the method")
    method_uuid: str = Field(description="UUID of the method to add code to")
    code: str = Field(
        description='PHP statements for the method body, without the function declaration. Example: "return $a + $b;"'
    )


class MethodRef(ToolArguments):
    method_uuid: str = Field(description="UUID of the method")


class SearchMethodsArgs(ToolArguments):
    name: str | None = Field(default=None, description="Method name to search for (supports wildcards)")
    file_uuid: str | None = Field(default=None, description="Restrict results to one file")


# =============================================================================
# Statements
# =============================================================================
class CreateStatementArgs(ToolArguments):
    file_uuid: str = Field(serialization_alias="file", description="UUID of the file")
    method_uuid: str = Field(serialization_alias="method", description="UUID of the method that owns the statement")


class AddStatementCodeArgs(ToolArguments):
    file_uuid: str = Field(description="UUID of the file")
    statement_uuid: str = Field(description="UUID of the statement to fill")
    code: str = Field(description="PHP code for this single statement")


class StatementRef(ToolArguments):
    statement_uuid: str = Field(description="UUID of the statement")


# =============================================================================
# Routes
# =============================================================================
class CreateRouteArgs(ToolArguments):
    project_id: str = Field(description="The UUID of the Stellify project")
    name: str = Field(description='Route / page name (e.g. "Contact Form")')
    path: str = Field(description='URL path (e.g. "/contact")')
    method: Literal["GET", "POST", "PUT", "PATCH", "DELETE"] = Field(description="HTTP method")
    type: Literal["web", "api"] | None = Field(default=None, description="Route type")
    data: dict[str, Any] | None = Field(default=None, description="Extra route attributes")


class RouteRef(ToolArguments):
    route_uuid: str = Field(description="UUID of the route")


# =============================================================================
# Elements
# =============================================================================
class CreateElementArgs(ToolArguments):
    type: str = Field(description='Element type (e.g. "s-wrapper", "s-input", "s-form")')
    page: str | None = Field(default=None, description="Route UUID, for a root element of a page")
    parent: str | None = Field(default=None, description="Parent element UUID, for a nested element")


class UpdateElementArgs(ToolArguments):
    element_uuid: str = Field(description="UUID of the element to update")
    data: dict[str, Any] = Field(
        description='Attributes to set (e.g. {"tag": "button", "text": "Send", "classes": ["btn"]})'
    )

    def to_params(self) -> dict[str, Any]:
        return dict(self.data)


class ElementRef(ToolArguments):
    element_uuid: str = Field(description="UUID of the element")


class SearchElementsArgs(ToolArguments):
    search: str | None = Field(default=None, description="Text matched against element names")
    type: str | None = Field(default=None, description="Filter by element type")
    include_metadata: bool | None = None
    per_page: int | None = Field(default=None, ge=1, le=100)


class HtmlToElementsArgs(ToolArguments):
    elements: str = Field(description="HTML markup to convert")
    page: str | None = Field(default=None, description="Route UUID to attach the elements to")
    selection: str | None = Field(default=None, description="Element UUID to insert under")
    test: bool | None = Field(default=None, description="Preview only; nothing is saved when true")


# =============================================================================
# Directories
# =============================================================================
class CreateDirectoryArgs(ToolArguments):
    project_id: str = Field(description="The UUID of the Stellify project")
    name: str = Field(description='Directory name (e.g. "Services")')
    parent_uuid: str | None = Field(default=None, serialization_alias="parent", description="Parent directory UUID")


class DirectoryRef(ToolArguments):
    directory_uuid: str = Field(description="UUID of the directory")


# =============================================================================
# Globals (shared application library)
# =============================================================================
class InstallGlobalArgs(ToolArguments):
    file_uuid: str = Field(description="UUID of the global file")
    directory_uuid: str = Field(description="UUID of the project directory to install into")


class SearchGlobalMethodsArgs(ToolArguments):
    query: str = Field(description="Search term matched against global method names")


# =============================================================================
# Modules (groups of globals)
# =============================================================================
class ModuleRef(ToolArguments):
    module_uuid: str = Field(description="UUID of the module")


class CreateModuleArgs(ToolArguments):
    name: str = Field(description="Module name")
    description: str | None = None
    version: str | None = Field(default=None, description='Semantic version, e.g. "1.0.0"')
    tags: list[str] | None = None


class AddFileToModuleArgs(ToolArguments):
    module_uuid: str = Field(description="UUID of the module")
    file_uuid: str = Field(description="UUID of the global file to add")
    order: int | None = Field(default=None, ge=0, description="Position within the module")


class ModuleFileArgs(ToolArguments):
    module_uuid: str = Field(description="UUID of the module")
    file_uuid: str = Field(description="UUID of the file to remove")


class InstallModuleArgs(ToolArguments):
    module_uuid: str = Field(description="UUID of the module")
    directory_uuid: str = Field(description="UUID of the project directory to install into")


# =============================================================================
# Resource scaffolding
# =============================================================================
class CreateResourcesArgs(ToolArguments):
    project_id: str = Field(description="The UUID of the Stellify project")
    name: str = Field(description='Resource name, singular (e.g. "Invoice")')
    model: bool = Field(default=True, description="Generate an Eloquent model")
    controller: bool = Field(default=True, description="Generate a resource controller")
    service: bool = Field(default=False, description="Generate a service class")
    migration: bool = Field(default=True, description="Generate a migration")
    fields: list[TypedName] | None = Field(default=None, description="Model fields for the migration")


# =============================================================================
# Code execution
# =============================================================================
class RunCodeArgs(ToolArguments):
    file_uuid: str = Field(description="UUID of the file containing the method")
    method_uuid: str = Field(description="UUID of the method to execute")
    arguments: list[Any] | None = Field(default=None, description="Positional arguments for the method")
    timeout: int | None = Field(
        default=None, ge=1, le=60, description="Execution time limit in seconds, enforced by Stellify"
    )


# =============================================================================
# Capability registry
# =============================================================================
class ListCapabilitiesArgs(ToolArguments):
    category: str | None = Field(default=None, description="Only list capabilities in this category")


class RequestCapabilityArgs(ToolArguments):
    name: str = Field(description="Short name of the missing capability")
    description: str = Field(description="What the capability should do")
    use_case: str | None = Field(default=None, description="What you were building when you needed it")


# =============================================================================
# Analysis
# =============================================================================
class AnalyzePerformanceArgs(ToolArguments):
    file_uuid: str = Field(description="UUID of the file to analyze")
    method_uuid: str | None = Field(default=None, description="Limit the analysis to one method")


class AnalyzeQualityArgs(ToolArguments):
    file_uuid: str = Field(description="UUID of the file to analyze")
