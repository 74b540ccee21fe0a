from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class DocTag:
    tag_name: str
    text: str
    name: Optional[str] = None
    types: Optional[List[str]] = None


@dataclass
class DocComment:
    description: str = ""
    tags_list: List[DocTag] = field(default_factory=list)

    def tags(self, tag_name: Optional[str] = None) -> List[DocTag]:
        if tag_name is None:
            return list(self.tags_list)
        return [tag for tag in self.tags_list if tag.tag_name == tag_name]

    def merge(self, other: "DocComment") -> "DocComment":
        return DocComment(
            description=self.description or other.description,
            tags_list=self.tags_list + other.tags_list,
        )

    @property
    def is_empty(self) -> bool:
        return not self.description and not self.tags_list
