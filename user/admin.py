from django.contrib import admin

from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("id", "email", "name", "phone_number", "is_staff", "date_joined")
    search_fields = ("email", "name", "phone_number")
    list_filter = ("is_staff", "is_active")
