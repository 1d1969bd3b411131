"""Vector similarity search over the employee collection."""

import json

from langchain_core.embeddings import Embeddings
from langchain_mongodb import MongoDBAtlasVectorSearch
from pymongo.collection import Collection

from hr_agent.core.errors import ToolExecutionError
from hr_agent.models.llm import RetrievalResult
from hr_agent.utils.logging import get_logger

logger = get_logger(__name__)

COLLECTION_NAME = "employees"
INDEX_NAME = "vector_index"
TEXT_KEY = "embedding_text"
EMBEDDING_KEY = "embedding"
DEFAULT_RESULT_COUNT = 10


class EmployeeVectorSearch:
    """Embeds free-text queries and ranks employee records by cosine similarity."""

    def __init__(self, collection: Collection, embeddings: Embeddings):
        self.vector_store = MongoDBAtlasVectorSearch(
            collection=collection,
            embedding=embeddings,
            index_name=INDEX_NAME,
            text_key=TEXT_KEY,
            embedding_key=EMBEDDING_KEY,
            relevance_score_fn="cosine",
        )

    async def search(self, query: str, n: int = DEFAULT_RESULT_COUNT) -> list[RetrievalResult]:
        """Return the n best matches for query, best first.

        Raises:
            ToolExecutionError: If embedding the query or running the search fails
        """
        logger.info(f"Employee search for {query!r} (n={n})")
        try:
            matches = await self.vector_store.asimilarity_search_with_score(query, k=n)
        except Exception as e:
            logger.error(f"Employee search failed: {e}", exc_info=True)
            raise ToolExecutionError("employee_lookup", str(e)) from e

        results = [
            RetrievalResult(record={TEXT_KEY: doc.page_content, **doc.metadata}, score=float(score))
            for doc, score in matches[:n]
        ]
        logger.debug(f"Employee search returned {len(results)} results")
        return results

    async def lookup(self, query: str, n: int = DEFAULT_RESULT_COUNT) -> str:
        """Search and serialize the matches as a JSON array for the model to read."""
        results = await self.search(query, n)
        return json.dumps([r.as_dict() for r in results], default=str)
