from django.contrib import admin

# Admin branding for the research document portal

admin.site.site_title = 'RDMS Admin'
admin.site.site_header = 'Research Document Management'
admin.site.index_title = 'Dashboard'
