"""In-memory document corpus (for tests and local runs)"""

from flocore.models import CorpusDocument

from .base import BaseDocumentCorpus

SAMPLE_DOCUMENTS = [
    CorpusDocument(name="Structural_Drawings_Rev4.pdf", metadata={"type": "PDF", "uploader": "Admin"}),
    CorpusDocument(name="RFI-112_HVAC_Response.pdf", metadata={"type": "PDF", "uploader": "MEP Consultant"}),
    CorpusDocument(name="Concrete_Pour_Checklist_L2.docx", metadata={"type": "DOCX", "uploader": "QC Team"}),
    CorpusDocument(name="Site-Logistics-Plan.pdf", metadata={"type": "PDF", "uploader": "Site Manager"}),
    CorpusDocument(name="Weekly_Safety_Audit_Template.xlsx", metadata={"type": "XLSX", "uploader": "HSE Officer"}),
]


class InMemoryDocumentCorpus(BaseDocumentCorpus):
    """Corpus backed by a plain list"""

    def __init__(self, documents: list[CorpusDocument | str] | None = None):
        """
        Args:
            documents: documents or bare file names (sample project set when None)
        """
        if documents is None:
            documents = SAMPLE_DOCUMENTS
        self._documents = [
            d if isinstance(d, CorpusDocument) else CorpusDocument(name=d) for d in documents
        ]

    def add(self, document: CorpusDocument | str) -> None:
        if isinstance(document, str):
            document = CorpusDocument(name=document)
        self._documents.append(document)

    def remove(self, name: str) -> None:
        self._documents = [d for d in self._documents if d.name != name]

    def list_documents(self) -> list[CorpusDocument]:
        return list(self._documents)
