from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Dimension of requirement and profile embeddings produced by the embedding service
EMBEDDING_DIMENSIONS = 1024
