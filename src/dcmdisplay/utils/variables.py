import datetime


def date_time(date, time):
    """Merge a date with a time of day.

    Without a time the result is at midnight, without a date it is None.
    """
    if date is None:
        return None
    if time is None:
        return datetime.datetime(date.year, date.month, date.day)
    return datetime.datetime(
        date.year, date.month, date.day, 
        time.hour, time.minute, time.second, time.microsecond)

def milliseconds(delta):
    return delta.total_seconds() * 1000.0

def date_to_str(tm):
    year = str(tm.year).rjust(4, '0')
    month = str(tm.month).rjust(2, '0')
    day = str(tm.day).rjust(2, '0')
    return year + month + day



if __name__ == "__main__":

    date = datetime.date(2023, 3, 1)
    tim = datetime.time(13, 12, 40, 30000)
    dt = datetime.datetime(2023, 3, 1, 13, 12, 40, 30000)

    assert date_time(date, tim) == dt
    assert date_time(date, None) == datetime.datetime(2023, 3, 1)
    assert date_time(None, tim) is None
    assert milliseconds(dt - datetime.datetime(2023, 3, 1, 13, 12, 40)) == 30.0
    assert date_to_str(date) == '20230301'

    print('Module passed all tests')
