from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ReviewFilterParams:
    movie_id: Optional[str] = None
    user_id: Optional[str] = None
    limit_rows: int = 0  # 0 means no limit

    def to_query(self) -> Dict[str, Any]:
        query = {}
        if self.movie_id is not None:
            query["movieId"] = self.movie_id
        if self.user_id is not None:
            query["userId"] = self.user_id
        return query
