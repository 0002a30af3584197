"""QR Attendance package.

Organized by feature modules (qr, attendance, leaves, reports, scanning)
with a thin Flask controller layer over service/repository layers.
"""
