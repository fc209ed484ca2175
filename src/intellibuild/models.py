from pydantic import BaseModel, ConfigDict, Field, ValidationError

from intellibuild.exceptions import RepositoryURLNotFoundError


class Repository(BaseModel):
    clone_url: str | None = None  # GitHub
    git_http_url: str | None = None  # GitLab


class Project(BaseModel):
    git_http_url: str | None = None


class PushEvent(BaseModel):
    """
    Subset of a push notification needed to locate the repository.

    Accepts the plain ``{"repoURL": ...}`` form as well as GitHub and GitLab
    push event bodies.
    """

    model_config = ConfigDict(populate_by_name=True)

    repo_url: str | None = Field(default=None, alias="repoURL")
    repository: Repository | None = None
    project: Project | None = None

    def clone_url(self) -> str | None:
        candidates = [self.repo_url]
        if self.repository is not None:
            candidates += [self.repository.clone_url, self.repository.git_http_url]
        if self.project is not None:
            candidates.append(self.project.git_http_url)

        for url in candidates:
            if url is None:
                continue
            url = url.strip()
            # never let a payload smuggle an option into git
            if url and not url.startswith("-"):
                return url
        return None


def parse_repo_url(body: bytes | str) -> str:
    """
    Extract the repository URL from a webhook body.

    Raises:
        RepositoryURLNotFoundError: The body is not a JSON object or carries no usable URL
    """
    try:
        event = PushEvent.model_validate_json(body)
    except ValidationError as e:
        raise RepositoryURLNotFoundError("Repository URL not found") from e

    url = event.clone_url()
    if url is None:
        raise RepositoryURLNotFoundError("Repository URL not found")
    return url
