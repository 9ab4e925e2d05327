"""
Retrieval prompts.

Selection picks one corpus document (exact file name) or "N/A"; synthesis
produces a short excerpt from the selected document.
"""

RAG_NOT_FOUND = "N/A"

RAG_SELECTION_PROMPT = """You are a document retrieval specialist. Analyze the user's query and the list of available project documents. Determine if any single document is highly relevant for answering the query.

User's Query: "{query}"

Available Documents:
{documents}

Your task:
1. If one document is clearly the best source, respond with its exact filename.
2. If no single document seems directly relevant, respond with "N/A".
3. Your response must be ONLY the filename or "N/A". Do not add any other text.
"""

RAG_SYNTHESIS_PROMPT = """You are a document retrieval system. You have identified the document "{source}" as relevant to the user's query "{query}".

Your task is to produce a short paragraph of text from this document that answers the user's query. The text should be directly relevant to the query.

Example:
- Query: "What is the concrete strength for the level 5 slab?"
- Document: "Structural_Drawings_Rev4.pdf"
- Your context: "Per section S-2.1 of the structural drawings, the 28-day compressive strength (f'c) for the Level 5 slab-on-deck shall be 4,000 psi (27.5 MPa). All concrete must conform to ASTM C39 standards."

Generate the context now."""


def format_selection_prompt(query: str, names: list[str]) -> str:
    documents = "\n".join(f"- {name}" for name in names)
    return RAG_SELECTION_PROMPT.format(query=query, documents=documents)


def format_synthesis_prompt(query: str, source: str) -> str:
    return RAG_SYNTHESIS_PROMPT.format(query=query, source=source)
