"""Wire representations of projects (camelCase JSON)."""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from projects_api.domain.models import EnrichedProject, SimilarityEdge


class SimilarProject(BaseModel):
    name: str
    reason: str
    url: str

    @classmethod
    def from_edge(cls, edge: SimilarityEdge) -> 'SimilarProject':
        return cls(name=edge.target_name, reason=edge.reason, url=edge.target_url)


class ProjectResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    origin: str
    owner: str
    name: str
    full_name: str
    description: str
    url: str
    homepage: Optional[str] = None
    language: str
    created_at: str
    updated_at: str
    readme: str
    tags: List[str]
    similar_to: List[SimilarProject]

    @classmethod
    def from_project(cls, project: EnrichedProject) -> 'ProjectResponse':
        return cls(
            origin=project.origin,
            owner=project.owner,
            name=project.name,
            full_name=project.full_name,
            description=project.description,
            url=project.url,
            homepage=project.homepage,
            language=project.language,
            created_at=project.created_at,
            updated_at=project.updated_at,
            readme=project.readme,
            tags=list(project.tags),
            similar_to=[SimilarProject.from_edge(edge) for edge in project.similar_to]
        )


class ErrorResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
