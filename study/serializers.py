# study/serializers.py
from rest_framework import serializers
from drf_spectacular.utils import OpenApiTypes, extend_schema_field

from .models import BankQuestion, VaultDocument


class VaultDocumentSerializer(serializers.ModelSerializer):
    class Meta:
        model = VaultDocument
        fields = ["id", "name", "doc_type", "size_bytes", "content", "created_at"]
        read_only_fields = fields


class BankQuestionSerializer(serializers.ModelSerializer):
    class Meta:
        model = BankQuestion
        fields = ["id", "text", "subject", "marks"]


@extend_schema_field(OpenApiTypes.BINARY)
class UploadImageField(serializers.ImageField):
    """
    ImageField wrapper so drf-spectacular documents the body as a binary upload.
    """

    pass


@extend_schema_field(OpenApiTypes.BINARY)
class UploadFileField(serializers.FileField):
    pass


class VaultDocumentUploadSerializer(serializers.Serializer):
    """
    multipart/form-data vault upload. `name` defaults to the file name.
    """

    file = UploadFileField(required=False)
    name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    doc_type = serializers.ChoiceField(
        choices=VaultDocument.DocType.choices, required=False
    )

    def validate(self, attrs):
        if not attrs.get("file") and not (attrs.get("name") or "").strip():
            raise serializers.ValidationError("Either file or name is required.")
        return attrs


class VaultContextResponseSerializer(serializers.Serializer):
    vault_context = serializers.CharField(allow_blank=True)
    document_count = serializers.IntegerField()


class SubjectListResponseSerializer(serializers.Serializer):
    subjects = serializers.ListField(child=serializers.CharField())


class EvaluateAnswerUploadSerializer(serializers.Serializer):
    """
    Scan-to-Score request: an uploaded photo or a base64 data URL.

    When vault_context is omitted the names of the vault documents are used.
    """

    image = UploadImageField(required=False)
    image_data = serializers.CharField(required=False, allow_blank=False)
    vault_context = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs.get("image") and not attrs.get("image_data"):
            raise serializers.ValidationError("image or image_data is required.")
        return attrs


class EvaluationResultSerializer(serializers.Serializer):
    score = serializers.FloatField()
    transcription = serializers.CharField(allow_blank=True)
    gapAnalysis = serializers.CharField(allow_blank=True)
    keyPoints = serializers.ListField(child=serializers.CharField(allow_blank=True))
    tips = serializers.CharField(allow_blank=True)


class VideoNotesRequestSerializer(serializers.Serializer):
    url = serializers.URLField()
    topic = serializers.CharField(required=False, allow_blank=True)
    save_to_vault = serializers.BooleanField(required=False, default=False)


class VideoNotesResponseSerializer(serializers.Serializer):
    notes = serializers.CharField()


class QueuedResponseSerializer(serializers.Serializer):
    status = serializers.CharField()
    task_id = serializers.CharField(allow_null=True)


class TutorRequestSerializer(serializers.Serializer):
    query = serializers.CharField()
    institution = serializers.CharField(required=False, allow_blank=True, default="")


class TutorResponseSerializer(serializers.Serializer):
    answer = serializers.CharField()


class SolutionRequestSerializer(serializers.Serializer):
    question_text = serializers.CharField()


class ModelSolutionSerializer(serializers.Serializer):
    intro = serializers.CharField(allow_blank=True)
    body = serializers.CharField(allow_blank=True)
    conclusion = serializers.CharField(allow_blank=True)
    keywords = serializers.ListField(child=serializers.CharField(allow_blank=True))


class AIErrorResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()
    code = serializers.CharField()
