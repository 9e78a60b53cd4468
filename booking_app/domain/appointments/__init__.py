"""
Appointments Domain

Booking submission (validation, schedule re-check, conflict re-check, insert)
and the admin status workflow:

    pending -> accepted | rejected | cancelled
    accepted -> completed | cancelled
"""
