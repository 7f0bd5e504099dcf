from abc import ABC, abstractmethod
from typing import List

from src.diplomacy.domain.country import CountryDirectory
from src.diplomacy.domain.relation_view import CategoryView


class ViewAssembler(ABC):
    """
    Interface for turning classifier output into render-ready views.
    Pure, no I/O.
    """
    @abstractmethod
    def assemble(self, categories: List[CategoryView], directory: CountryDirectory) -> List[CategoryView]:
        pass
