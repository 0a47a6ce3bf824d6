"""Services for the PDF Study Assistant backend."""
from .document_loader import DocumentLoader
from .chunking_engine import ChunkingEngine, ChunkingConfigError
from .retrieval_engine import RetrievalEngine
from .llm_client import LLMClient, LLMResponse, LLMError, LLMClientError
from .study_generator import StudyGenerator

__all__ = ['DocumentLoader', 'ChunkingEngine', 'ChunkingConfigError', 'RetrievalEngine', 'LLMClient', 'LLMResponse', 'LLMError', 'LLMClientError', 'StudyGenerator']
