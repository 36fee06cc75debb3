from django.contrib import admin, messages
from .models import Booking, BookingOption, OptionDate, SessionCustomField, BookingAnswer


class SoftDeleteAdmin(admin.ModelAdmin):
    """Lists deleted rows too, so they can be restored."""
    actions = ['restore_selected']

    def get_queryset(self, request):
        qs = self.model.all_objects.get_queryset()
        ordering = self.get_ordering(request)
        if ordering:
            qs = qs.order_by(*ordering)
        return qs

    @admin.display(boolean=True, description='Deleted')
    def deleted(self, obj):
        return obj.is_deleted

    @admin.action(description='Restore selected (undo delete)')
    def restore_selected(self, request, queryset):
        count = queryset.filter(deleted_at__isnull=False).restore()
        self.message_user(request, f'{count} restored.', messages.SUCCESS)


class BookingOptionInline(admin.TabularInline):
    model = BookingOption
    extra = 0
    fields = ['text', 'location', 'coursestarttime', 'courseendtime', 'maxanswers']


class OptionDateInline(admin.TabularInline):
    model = OptionDate
    extra = 0


class SessionCustomFieldInline(admin.TabularInline):
    model = SessionCustomField
    extra = 0


@admin.register(Booking)
class BookingAdmin(SoftDeleteAdmin):
    list_display = ['name', 'course_name', 'cmid', 'created_at', 'deleted']
    search_fields = ['name', 'course_name']
    readonly_fields = ['id', 'created_at', 'updated_at', 'deleted_at']
    inlines = [BookingOptionInline]


@admin.register(BookingOption)
class BookingOptionAdmin(SoftDeleteAdmin):
    list_display = ['text', 'booking', 'location', 'institution', 'coursestarttime', 'maxanswers', 'deleted']
    list_filter = ['booking', 'institution']
    search_fields = ['text', 'location', 'booking__name']
    readonly_fields = ['id', 'created_at', 'updated_at', 'deleted_at']
    inlines = [OptionDateInline]
    fieldsets = (
        ('Option', {'fields': ('id', 'booking', 'text', 'description')}),
        ('Place', {'fields': ('location', 'address', 'institution')}),
        ('Schedule', {'fields': ('coursestarttime', 'courseendtime', 'maxanswers')}),
        ('Status texts', {'fields': ('beforebookedtext', 'beforecompletedtext', 'aftercompletedtext')}),
        ('Audit', {'fields': ('created_at', 'updated_at', 'deleted_at'), 'classes': ('collapse',)}),
    )


@admin.register(OptionDate)
class OptionDateAdmin(admin.ModelAdmin):
    list_display = ['option', 'coursestarttime', 'courseendtime']
    list_filter = ['option__booking']
    inlines = [SessionCustomFieldInline]


@admin.register(BookingAnswer)
class BookingAnswerAdmin(admin.ModelAdmin):
    list_display = ['user', 'option', 'waitinglist', 'completed', 'created_at']
    list_filter = ['waitinglist', 'completed', 'option__booking']
    search_fields = ['user__username', 'option__text']
    readonly_fields = ['id', 'created_at', 'updated_at']
