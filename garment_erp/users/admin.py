from django.contrib import admin
from django.contrib.auth import get_user_model
from rolepermissions.admin import RolePermissionsUserAdmin
from rolepermissions.checkers import has_permission
from rolepermissions.exceptions import RoleDoesNotExist
from rolepermissions.roles import get_user_roles, assign_role, remove_role

User = get_user_model()

# Unregister User first
try:
    admin.site.unregister(User)
except admin.sites.NotRegistered:
    pass


@admin.register(User)
class CustomUserAdmin(RolePermissionsUserAdmin):
    ordering = ("email",)
    list_display = ("email", "full_name", "is_active", "is_staff", "get_roles")
    search_fields = ("email", "full_name")
    list_filter = ("is_active", "is_staff")
    actions = ['assign_owner_role', 'assign_admin_role', 'assign_hr_role']

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Personal Info', {'fields': ('full_name',)}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'password1', 'password2', 'full_name', 'is_active', 'is_staff'),
        }),
    )

    def get_roles(self, obj):
        return ", ".join([role.get_name() for role in get_user_roles(obj)])

    get_roles.short_description = "Roles"

    def _assign_role(self, request, queryset, role_name):
        if not has_permission(request.user, 'manage_users'):
            self.message_user(request, "Only owners can assign roles.", level='error')
            return
        for user in queryset:
            try:
                for role in get_user_roles(user):
                    remove_role(user, role.get_name())
                assign_role(user, role_name)
                self.message_user(request, f"Assigned {role_name} role to {user.email}")
            except RoleDoesNotExist:
                self.message_user(request, f"Role {role_name} does not exist for {user.email}.", level='error')

    def assign_owner_role(self, request, queryset):
        self._assign_role(request, queryset, 'owner')

    assign_owner_role.short_description = "Assign Owner role"

    def assign_admin_role(self, request, queryset):
        self._assign_role(request, queryset, 'admin')

    assign_admin_role.short_description = "Assign Admin role"

    def assign_hr_role(self, request, queryset):
        self._assign_role(request, queryset, 'hr')

    assign_hr_role.short_description = "Assign HR role"
