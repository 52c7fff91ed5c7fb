"""Form parameters for enqueueable jobs.

Each model validates one form submission. List fields accept comma and/or
whitespace separated text ("a, b c"); port lists hold integers 1-65535.
Blank fields count as absent.
"""

from collections.abc import Mapping
from typing import Annotated, Any, ClassVar, Literal, Self

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from armory.contracts import JobParamsError
from armory.core.repos import REPO_NAME_PATTERN
from armory.plugins.validation import drop_blank, split_list, to_field_errors


def _split(value: Any) -> Any:
    if isinstance(value, str) or (
        isinstance(value, list | tuple) and all(isinstance(v, str) for v in value)
    ):
        return split_list(value)
    return value


Port = Annotated[int, Field(ge=1, le=65535)]

HostList = Annotated[list[str], BeforeValidator(_split)]
PortList = Annotated[list[Port], BeforeValidator(_split)]
URLList = Annotated[list[str], BeforeValidator(_split)]
ExtList = Annotated[list[str], BeforeValidator(_split)]


class JobParams(BaseModel):
    """Base for job form models."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    job: ClassVar[str]

    @classmethod
    def from_form(cls, raw: Mapping[str, Any]) -> Self:
        """Validate a form submission.

        Raises:
            JobParamsError: With every field error
        """
        submitted = drop_blank(raw)
        try:
            return cls.model_validate(submitted)
        except ValidationError as e:
            raise JobParamsError(cls.job, to_field_errors(e, submitted)) from None

    def job_args(self) -> list[Any]:
        """Positional arguments recorded with the job."""
        return [self.model_dump(mode="json")]


class InstallRepoParams(JobParams):
    """Install a plugin repository from a git URI."""

    job: ClassVar[str] = "install_repo"

    uri: str = Field(pattern=r"^(?:(?:https?|git|ssh|file)://\S+|[\w.-]+@[\w.-]+:\S+)$")
    name: str | None = Field(default=None, pattern=f"^{REPO_NAME_PATTERN.pattern}$")

    def job_args(self) -> list[Any]:
        return [self.uri, self.name]


class ReconParams(JobParams):
    """Recursive recon over a scope of hosts, domains or IPs."""

    job: ClassVar[str] = "recon"

    scope: HostList = Field(min_length=1)
    ignore: HostList = Field(default_factory=list)
    max_depth: int | None = Field(default=None, ge=1)


class NmapParams(JobParams):
    """nmap scan of targets."""

    job: ClassVar[str] = "nmap"

    targets: HostList = Field(min_length=1)
    ports: PortList | None = None
    top_ports: int | None = Field(default=None, ge=1, le=65535)
    service_scan: bool = False


class MasscanParams(JobParams):
    """masscan scan of IPs or ranges."""

    job: ClassVar[str] = "masscan"

    ips: HostList = Field(min_length=1)
    ports: PortList = Field(min_length=1)


class ImportParams(JobParams):
    """Import a scan output file into the database."""

    job: ClassVar[str] = "import"

    type: Literal["nmap", "masscan"]
    path: str = Field(min_length=1)


class SpiderParams(JobParams):
    """Web spider of a host, domain or site."""

    job: ClassVar[str] = "spider"

    type: Literal["host", "domain", "site"]
    target: str = Field(min_length=1)
    limit: int | None = Field(default=None, ge=1)
    max_depth: int | None = Field(default=None, ge=1)
    allowed_hosts: HostList = Field(default_factory=list)
    allowed_ports: PortList = Field(default_factory=list)
    ignore_urls: URLList = Field(default_factory=list)
    ignore_exts: ExtList = Field(default_factory=list)
