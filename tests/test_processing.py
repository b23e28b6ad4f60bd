from confsched.models import Conference, ConferenceType, Room, RoomType, Schedule, ScheduleType, Track
from confsched.processing import (
    extract_moderator, extract_speaker, location_of, process_conference, time_display, title_from_type,
    to_schedule_item,
)


def test_time_display():
    assert time_display("09:00:00", "10:30:00") == "09:00 - 10:30"
    assert time_display("09:00", None) == "From 09:00"
    assert time_display(None, "10:30") == "Until 10:30"
    assert time_display(None, None) == ""


def test_title_from_notes_keywords_then_type():
    assert title_from_type(ScheduleType.BREAK, "Morning coffee break") == "Coffee Break"
    assert title_from_type(ScheduleType.BREAK, "Lunch Break") == "Lunch Break + ISOMA"
    assert title_from_type(ScheduleType.TALK, "Opening remarks") == "Opening Ceremony"
    assert title_from_type(ScheduleType.ONE_DAY_ACTIVITY, None) == "Activity Session"
    assert title_from_type(None, None) == "Schedule Item"


def test_speaker_and_moderator():
    room = Room(id="r1", description="Keynote by Jane Doe, MIT")
    assert extract_speaker(room) == "Jane Doe"
    assert extract_moderator("Panel. Moderator: Dr Lee, host") == "Dr Lee"
    assert extract_speaker(Room(id="r2", description="Moderator: Ann")) == "Ann"
    assert extract_speaker(Room(id="r3", track=Track(id="t1", name="Track 1"))) == "Track 1"
    assert extract_speaker(None) is None


def test_location():
    assert location_of(Schedule(id="s1")) == "All Areas"
    main = Room(id="r1", name="Main Hall", type=RoomType.MAIN, online_meeting_url="https://meet")
    assert location_of(Schedule(id="s1", rooms=[main])) == "Main Hall (Online)"
    parallel = [Room(id=f"p{i}", type=RoomType.PARALLEL) for i in range(3)]
    assert location_of(Schedule(id="s1", rooms=parallel)) == "3 Parallel Sessions"


def test_process_conference_builds_numbered_days():
    conf = Conference(
        id="c1", name="ICODSA 2025", year="2025", type=ConferenceType.ICODSA,
        start_date="2025-06-10T00:00:00Z", end_date="2025-06-12T00:00:00Z", timezone_iana="Asia/Jakarta",
        schedules=[
            Schedule(id="s2", date="2025-06-12T00:00:00Z", start_time="13:00", type=ScheduleType.BREAK,
                     notes="Lunch break"),
            Schedule(id="s1", date="2025-06-10T00:00:00Z", start_time="09:00", type=ScheduleType.TALK,
                     rooms=[Room(id="m1", name="Main Hall", type=RoomType.MAIN,
                                 description="Opening Speech by Rector")]),
            Schedule(id="s0", date="2025-06-10T00:00:00Z", start_time="08:00", type=ScheduleType.TALK,
                     notes="Registration desk"),
            Schedule(id="bad", date="someday"),
        ],
    )
    out = process_conference(conf)

    assert out.start_date == "2025-06-10"
    assert out.timezone == "Asia/Jakarta"
    assert [(d.date, d.day_number) for d in out.days] == [("2025-06-10", 1), ("2025-06-12", 2)]
    assert out.days[0].day_title == "Tuesday, 10 June"

    first_day = out.days[0].items
    assert [i.id for i in first_day] == ["s0", "s1"]
    assert first_day[0].title == "Registration"
    assert first_day[0].location == "All Areas"
    assert first_day[1].title == "Opening Speech by Rector"
    assert first_day[1].speaker == "Rector"
    assert first_day[1].room_name == "Main Hall"
    assert out.days[1].items[0].title == "Lunch Break + ISOMA"


def test_online_url_falls_back_to_parallel_room():
    main = Room(id="r1", name="Main Hall", type=RoomType.MAIN)
    parallel = Room(id="r2", name="Room A", type=RoomType.PARALLEL, online_meeting_url="https://meet/a")
    item = to_schedule_item(Schedule(id="s1", rooms=[main, parallel]), "2025-06-10")
    assert item.online_url == "https://meet/a"

    main.online_meeting_url = "https://meet/main"
    item = to_schedule_item(Schedule(id="s1", rooms=[main, parallel]), "2025-06-10")
    assert item.online_url == "https://meet/main"
