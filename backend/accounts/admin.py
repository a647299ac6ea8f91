from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from accounts.models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin panel for riders and drivers"""

    list_display = [
        "name",
        "phone_number",
        "role",
        "is_active",
        "date_joined",
    ]

    list_filter = [
        "role",
        "is_active",
        "date_joined",
    ]

    search_fields = [
        "name",
        "phone_number",
    ]

    ordering = ("phone_number",)

    fieldsets = BaseUserAdmin.fieldsets + (
        (
            "Dispatch Info",
            {
                "fields": (
                    "name",
                    "role",
                    "phone_number",
                )
            },
        ),
    )

    # Role is fixed once the account exists
    def get_readonly_fields(self, request, obj=None):
        readonly = list(super().get_readonly_fields(request, obj))
        if obj is not None:
            readonly.append("role")
        return readonly
