from django.contrib import admin
from .models import Client, Job, JobAssignment


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ['name', 'contact_name', 'email', 'industry', 'status']
    list_filter = ['status', 'industry']
    search_fields = ['name', 'contact_name', 'email']


@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ['title', 'client', 'location', 'status', 'created_at']
    list_filter = ['status']
    search_fields = ['title', 'client__name']


@admin.register(JobAssignment)
class JobAssignmentAdmin(admin.ModelAdmin):
    list_display = ['user', 'job', 'assigned_by', 'assigned_at']
    search_fields = ['user__email', 'job__title']
    readonly_fields = ['assigned_at']
