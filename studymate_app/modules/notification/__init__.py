# File: studymate_app/modules/notification/__init__.py
# Outbound notifications (email). No blueprint: only services.
