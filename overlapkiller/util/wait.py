# Copyright 2014 The Kubernetes Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import asyncio

FOREVER_TEST_TIMEOUT = 30


# `Until` from `client-go`, with the period measured after `f` returns.
# If `immediate` is false, a full period passes before the first call.
async def until(f, period, stop_event, *, immediate=True):
    stop_task = asyncio.ensure_future(stop_event.wait())
    try:
        if not immediate:
            await _wait(period, stop_task)
        while not stop_event.is_set():
            await f()
            await _wait(period, stop_task)
    finally:
        stop_task.cancel()
        await asyncio.gather(stop_task, return_exceptions=True)


async def _wait(period, stop_task):
    if stop_task.done():
        return
    timer_task = asyncio.ensure_future(asyncio.sleep(period))
    try:
        await asyncio.wait([timer_task, stop_task], return_when=asyncio.FIRST_COMPLETED)
    finally:
        timer_task.cancel()
        await asyncio.gather(timer_task, return_exceptions=True)
