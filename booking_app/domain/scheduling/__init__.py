"""
Scheduling Domain

Computes which slot starts a client may book.

MODULES:
- durations.py: free-text prestation durations ("1h30", "45min") to minutes
- periods.py: opening-hours periods ("9h-13h|14h-17h") to slot starts
- schedule.py: WeeklySchedule, the single view over opening hours or explicit slots
- conflicts.py: buffer-aware overlap test between a candidate and booked appointments
- availability.py: date eligibility and slot filtering (pure, no database access)
- repository.py / service.py / router.py: storage, orchestration and HTTP endpoints

RULES:
- Slot starts are spaced SLOT_INTERVAL_MINUTES apart inside each period
- Appointments need BUFFER_MINUTES of idle time on both sides
- Only pending and accepted appointments occupy a slot
- Same-day booking is not offered
"""
