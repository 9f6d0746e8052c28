from .materializer import CLASS_MARKER, Document, Materializer, infer_type, type_adapter

__all__ = ["CLASS_MARKER", "Document", "Materializer", "infer_type", "type_adapter"]
