from django.contrib import admin

from .models import BankQuestion, VaultDocument


@admin.register(VaultDocument)
class VaultDocumentAdmin(admin.ModelAdmin):
    list_display = ("name", "doc_type", "size_bytes", "created_at")
    list_filter = ("doc_type", "created_at")
    search_fields = ("name", "content")
    readonly_fields = ("created_at",)


@admin.register(BankQuestion)
class BankQuestionAdmin(admin.ModelAdmin):
    list_display = ("short_text", "subject", "marks", "is_active")
    list_filter = ("subject", "is_active")
    search_fields = ("text", "subject")

    def short_text(self, obj):
        text = obj.text or ""
        return (text[:50] + "...") if len(text) > 50 else text

    short_text.short_description = "Question"
