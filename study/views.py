from __future__ import annotations

import logging
from uuid import UUID

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)
from rest_framework import status
from rest_framework.decorators import api_view, parser_classes
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response

from .ai import DecodeError, TransportError, get_default_gateway
from .models import BankQuestion, VaultDocument
from .serializers import (
    AIErrorResponseSerializer,
    BankQuestionSerializer,
    EvaluateAnswerUploadSerializer,
    EvaluationResultSerializer,
    ModelSolutionSerializer,
    QueuedResponseSerializer,
    SolutionRequestSerializer,
    SubjectListResponseSerializer,
    TutorRequestSerializer,
    TutorResponseSerializer,
    VaultContextResponseSerializer,
    VaultDocumentSerializer,
    VaultDocumentUploadSerializer,
    VideoNotesRequestSerializer,
    VideoNotesResponseSerializer,
)
from .tasks import generate_notes_task
from .vault import build_vault_context, detect_subjects, guess_doc_type


logger = logging.getLogger(__name__)

AI_UNREACHABLE_MESSAGE = "Could not reach the AI. Please try again."
AI_BAD_RESPONSE_MESSAGE = "The AI gave an unexpected answer. Please try again."
TUTOR_UNREACHABLE_MESSAGE = "Sorry, there was an error reaching the AI tutor."

AI_ERROR_RESPONSES = {
    400: OpenApiResponse(description="Invalid input."),
    502: AIErrorResponseSerializer,
}


# ------------------------
# Helpers
# ------------------------

def ai_error_response(exc: Exception, unreachable_message: str = AI_UNREACHABLE_MESSAGE) -> Response:
    """
    Map a gateway failure to a 502 the client can tell apart by `code`.
    """
    if isinstance(exc, DecodeError):
        return Response(
            {"detail": AI_BAD_RESPONSE_MESSAGE, "code": "ai_bad_response"},
            status=status.HTTP_502_BAD_GATEWAY,
        )
    return Response(
        {"detail": unreachable_message, "code": "ai_unreachable"},
        status=status.HTTP_502_BAD_GATEWAY,
    )


def bad_request(message: str) -> Response:
    return Response({"detail": message}, status=status.HTTP_400_BAD_REQUEST)


# ------------------------
# Scan-to-Score
# ------------------------

@extend_schema(
    request={"multipart/form-data": EvaluateAnswerUploadSerializer},
    responses={200: EvaluationResultSerializer, **AI_ERROR_RESPONSES},
)
@api_view(["POST"])
@parser_classes([MultiPartParser, FormParser, JSONParser])
def evaluate_answer(request):
    """
    Grade a photographed handwritten answer out of 10.

    multipart/form-data:
      - image (file) or image_data (base64 data URL)
      - vault_context (optional): defaults to the names of the vault documents
    """
    serializer = EvaluateAnswerUploadSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    upload = data.get("image")
    image = upload.read() if upload is not None else data["image_data"]

    vault_context = data.get("vault_context")
    if vault_context is None:
        vault_context = build_vault_context(VaultDocument.objects.all())

    gateway = get_default_gateway()
    try:
        result = gateway.evaluate_answer(image, vault_context)
    except ValueError as e:
        return bad_request(str(e))
    except (TransportError, DecodeError) as e:
        logger.error("[AI] evaluate_answer failed: %s", e)
        return ai_error_response(e)

    logger.info("[AI] evaluate_answer score=%s key_points=%d", result.score, len(result.key_points))
    return Response(result.to_dict(), status=status.HTTP_200_OK)


# ------------------------
# Video-to-Notes
# ------------------------

@extend_schema(
    request=VideoNotesRequestSerializer,
    responses={
        200: VideoNotesResponseSerializer,
        202: QueuedResponseSerializer,
        **AI_ERROR_RESPONSES,
    },
)
@api_view(["POST"])
def generate_video_notes(request):
    """
    Turn a lecture URL into Markdown study notes.

    body:
      - url
      - topic (optional)
      - save_to_vault (optional): queue the job and store the notes as a vault document
    """
    serializer = VideoNotesRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    url = serializer.validated_data["url"]
    topic = serializer.validated_data.get("topic") or None

    if serializer.validated_data["save_to_vault"]:
        result = generate_notes_task.delay(url, topic)
        return Response(
            {"status": "queued", "task_id": getattr(result, "id", None)},
            status=status.HTTP_202_ACCEPTED,
        )

    gateway = get_default_gateway()
    try:
        notes = gateway.generate_notes(url, topic)
    except ValueError as e:
        return bad_request(str(e))
    except TransportError as e:
        logger.error("[AI] generate_notes failed: %s", e)
        return ai_error_response(e)

    return Response({"notes": notes}, status=status.HTTP_200_OK)


# ------------------------
# Quick tutor
# ------------------------

@extend_schema(
    request=TutorRequestSerializer,
    responses={200: TutorResponseSerializer, **AI_ERROR_RESPONSES},
)
@api_view(["POST"])
def ask_tutor(request):
    """
    Ask the AI tutor a question scoped to the student's institution.
    """
    serializer = TutorRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    gateway = get_default_gateway()
    try:
        answer = gateway.ask_tutor(
            serializer.validated_data["query"],
            serializer.validated_data["institution"],
        )
    except ValueError as e:
        return bad_request(str(e))
    except TransportError as e:
        logger.error("[AI] ask_tutor failed: %s", e)
        return ai_error_response(e, unreachable_message=TUTOR_UNREACHABLE_MESSAGE)

    return Response({"answer": answer}, status=status.HTTP_200_OK)


# ------------------------
# Question bank
# ------------------------

@extend_schema(
    parameters=[
        OpenApiParameter(
            name="subject",
            description='Filter by subject ("All" or omitted for every subject)',
            required=False,
            type=str,
        ),
    ],
    responses=BankQuestionSerializer(many=True),
)
@api_view(["GET"])
def list_questions(request):
    """
    Question bank, optionally filtered by subject.
    """
    qs = BankQuestion.objects.filter(is_active=True)
    subject = request.query_params.get("subject")
    if subject and subject != "All":
        qs = qs.filter(subject=subject)
    return Response(BankQuestionSerializer(qs, many=True).data)


@extend_schema(responses=SubjectListResponseSerializer)
@api_view(["GET"])
def list_subjects(request):
    """
    Subjects unlocked by the documents in the vault.
    """
    subjects = detect_subjects(VaultDocument.objects.all())
    return Response({"subjects": subjects})


def _model_solution_response(question_text: str) -> Response:
    gateway = get_default_gateway()
    try:
        solution = gateway.get_model_solution(question_text)
    except ValueError as e:
        return bad_request(str(e))
    except (TransportError, DecodeError) as e:
        logger.error("[AI] get_model_solution failed: %s", e)
        return ai_error_response(e)

    return Response(solution.to_dict(), status=status.HTTP_200_OK)


@extend_schema(
    request=SolutionRequestSerializer,
    responses={200: ModelSolutionSerializer, **AI_ERROR_RESPONSES},
)
@api_view(["POST"])
def model_solution(request):
    """
    Model solution for free-form question text.
    """
    serializer = SolutionRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    return _model_solution_response(serializer.validated_data["question_text"])


@extend_schema(
    request=None,
    responses={200: ModelSolutionSerializer, **AI_ERROR_RESPONSES},
)
@api_view(["POST"])
def question_model_solution(request, question_id: int):
    """
    Model solution for a question bank entry.

    Path parameters:
    - `question_id` (integer): BankQuestion ID
    """
    question = get_object_or_404(BankQuestion, id=question_id, is_active=True)
    return _model_solution_response(question.text)


# ------------------------
# Study vault
# ------------------------

@extend_schema(
    methods=["GET"],
    responses=VaultDocumentSerializer(many=True),
)
@extend_schema(
    methods=["POST"],
    request={"multipart/form-data": VaultDocumentUploadSerializer},
    responses={201: VaultDocumentSerializer},
)
@api_view(["GET", "POST"])
@parser_classes([MultiPartParser, FormParser, JSONParser])
def vault_documents(request):
    """
    GET: list vault documents, newest first.
    POST: add a document (file upload, or just a name).
    """
    if request.method == "GET":
        qs = VaultDocument.objects.all()
        return Response(VaultDocumentSerializer(qs, many=True).data)

    serializer = VaultDocumentUploadSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    upload = data.get("file")
    name = (data.get("name") or "").strip() or upload.name
    if data.get("doc_type"):
        doc_type = data["doc_type"]
    elif upload is not None:
        doc_type = guess_doc_type(getattr(upload, "content_type", ""))
    else:
        doc_type = VaultDocument.DocType.DOCUMENT

    doc = VaultDocument.objects.create(
        name=name,
        doc_type=doc_type,
        file=upload,
        size_bytes=upload.size if upload is not None else 0,
    )
    logger.info("vault document added: %s (%s)", doc.name, doc.doc_type)

    return Response(VaultDocumentSerializer(doc).data, status=status.HTTP_201_CREATED)


@extend_schema(request=None, responses={204: None})
@api_view(["DELETE"])
def delete_vault_document(request, document_id: UUID):
    """
    Remove a document (and its stored file) from the vault.
    """
    doc = get_object_or_404(VaultDocument, id=document_id)
    if doc.file:
        doc.file.delete(save=False)
    doc.delete()
    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(responses=VaultContextResponseSerializer)
@api_view(["GET"])
def vault_context(request):
    """
    The vault context string passed into answer grading.
    """
    docs = list(VaultDocument.objects.all())
    return Response(
        {"vault_context": build_vault_context(docs), "document_count": len(docs)}
    )
