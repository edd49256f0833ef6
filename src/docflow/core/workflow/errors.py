"""Erros canônicos do documento de workflow (DocFlow).

O documento de workflow (nós + arestas) é a única forma persistida da
qual o engine depende. Falhas de carregamento/validação do documento
devem produzir erros explícitos e estáveis.
"""


class WorkflowDocumentError(Exception):
    """Erro base do documento de workflow."""


class WorkflowFileNotFoundError(WorkflowDocumentError):
    """Arquivo de workflow não existe no caminho informado."""


class UnsupportedWorkflowFormatError(WorkflowDocumentError):
    """Formato de workflow não suportado (v1: YAML/JSON)."""


class WorkflowParseError(WorkflowDocumentError):
    """Falha ao parsear YAML/JSON."""


class WorkflowSchemaError(WorkflowDocumentError):
    """Documento não é estruturalmente válido segundo o schema canônico."""
