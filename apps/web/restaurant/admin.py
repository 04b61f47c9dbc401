"""Admin registration for restaurant models."""

from django.contrib import admin

from apps.web.restaurant.models import Dish, Menu, MenuOrderLine, Order, Slot


class MenuOrderLineInline(admin.TabularInline):
    """Inline for menus within an order."""

    model = MenuOrderLine
    extra = 0
    fields = ["menu", "quantity"]


@admin.register(Slot)
class SlotAdmin(admin.ModelAdmin):
    """Admin for pickup slots."""

    list_display = ["start_time", "limit_slot", "actual", "is_full"]
    readonly_fields = ["actual", "created_at", "updated_at"]

    @admin.display(boolean=True)
    def is_full(self, obj: Slot) -> bool:
        return obj.is_full


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin for orders."""

    list_display = ["pk", "user", "slot", "maked", "actual_date", "created_at"]
    list_filter = ["maked", "slot"]
    search_fields = ["user__username", "user__email"]
    inlines = [MenuOrderLineInline]
    # Confirmation only happens through the API so slot occupancy stays in step
    readonly_fields = ["slot", "actual_date", "created_at", "updated_at"]
    date_hierarchy = "created_at"

    fieldsets = [
        (None, {"fields": ["user", "maked"]}),
        ("Confirmation", {"fields": ["slot", "actual_date"]}),
        ("Timestamps", {"fields": ["created_at", "updated_at"]}),
    ]


@admin.register(Dish)
class DishAdmin(admin.ModelAdmin):
    """Admin for dishes."""

    list_display = ["name", "category", "price", "visible", "menu"]
    list_filter = ["category", "visible"]
    search_fields = ["name", "description"]
    readonly_fields = ["created_at", "updated_at"]


@admin.register(Menu)
class MenuAdmin(admin.ModelAdmin):
    """Admin for set menus."""

    list_display = [
        "pk",
        "price",
        "appetizer",
        "first",
        "second",
        "dessert",
        "visible",
    ]
    list_filter = ["visible"]
    search_fields = [
        "appetizer__name",
        "first__name",
        "second__name",
        "dessert__name",
    ]
    readonly_fields = ["created_at", "updated_at"]

    fieldsets = [
        (None, {"fields": ["price", "visible"]}),
        ("Courses", {"fields": ["appetizer", "first", "second", "dessert"]}),
        ("Timestamps", {"fields": ["created_at", "updated_at"]}),
    ]


@admin.register(MenuOrderLine)
class MenuOrderLineAdmin(admin.ModelAdmin):
    """Admin for order lines."""

    list_display = ["order", "menu", "quantity"]
    list_filter = ["menu"]
    readonly_fields = ["created_at", "updated_at"]
